from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import RequesterInput
from freshservice_toolkit.core.payload import full_name
from freshservice_toolkit.tools._common import MAX_PER_PAGE, quoted_query, shape_all, take


def _requester_profile(payload: Dict[str, Any]) -> Dict[str, Any]:
    requester = dict(payload)
    requester["full_name"] = full_name(payload.get("first_name"), payload.get("last_name"))
    requester["email"] = payload.get("primary_email")
    return requester


def list_requesters(
    client: FreshserviceClient,
    *,
    email: Optional[str] = None,
    query: Optional[str] = None,
    include_agents: bool = False,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List requesters, optionally narrowed by primary email or a query such as
    `first_name:'Ada'`. Agents are left out unless `include_agents` is set.
    """
    params: Dict[str, Any] = {"per_page": MAX_PER_PAGE}
    if email:
        params["email"] = email
    if query:
        params["query"] = quoted_query(query)
    if include_agents:
        params["include_agents"] = "true"

    records = client.get("requesters", "requesters", params=params, environment=environment)
    return shape_all(take(records, limit), _requester_profile)


def get_requester(
    client: FreshserviceClient, requester_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    requester = client.get_one(
        f"requesters/{requester_id}", "requester", environment=environment
    )
    return _requester_profile(requester) if isinstance(requester, dict) else None


def create_requester(
    client: FreshserviceClient,
    data: RequesterInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Create a requester; first_name and primary_email are required by the API."""
    if not data.first_name:
        raise ValueError("first_name is required to create a requester.")
    created = client.post(
        "requesters", "requester", data.to_body(), environment=environment
    )
    return _requester_profile(created) if isinstance(created, dict) else None


def update_requester(
    client: FreshserviceClient,
    requester_id: int,
    data: RequesterInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    body = data.to_body()
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    updated = client.put(
        f"requesters/{requester_id}", "requester", body, environment=environment
    )
    return _requester_profile(updated) if isinstance(updated, dict) else None


def deactivate_requester(
    client: FreshserviceClient, requester_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """Deactivate (soft delete) a requester; None when it does not exist."""
    if not client.delete(f"requesters/{requester_id}", environment=environment):
        return None
    return {"id": requester_id, "active": False}
