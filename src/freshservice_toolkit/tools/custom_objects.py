from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import CustomObjectRecordInput
from freshservice_toolkit.tools._common import take


def list_custom_objects(
    client: FreshserviceClient,
    *,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    records = client.get("objects", "custom_objects", environment=environment)
    return take(records, limit)


def list_custom_object_records(
    client: FreshserviceClient,
    object_id: int,
    *,
    query: Optional[str] = None,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List records of a custom object; `query` uses the records filter syntax,
    e.g. `status : 'active'`.
    """
    params = {"query": query} if query else None
    records = client.get(
        f"objects/{object_id}/records",
        "records",
        params=params,
        environment=environment,
    )
    return take(records, limit)


def create_custom_object_record(
    client: FreshserviceClient,
    object_id: int,
    data: CustomObjectRecordInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    return client.post(
        f"objects/{object_id}/records",
        "custom_object",
        data.to_body(),
        environment=environment,
    )


def update_custom_object_record(
    client: FreshserviceClient,
    object_id: int,
    record_id: int,
    data: CustomObjectRecordInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    return client.put(
        f"objects/{object_id}/records/{record_id}",
        "custom_object",
        data.to_body(),
        environment=environment,
    )


def delete_custom_object_record(
    client: FreshserviceClient,
    object_id: int,
    record_id: int,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    if not client.delete(
        f"objects/{object_id}/records/{record_id}", environment=environment
    ):
        return None
    return {"object_id": object_id, "record_id": record_id, "deleted": True}
