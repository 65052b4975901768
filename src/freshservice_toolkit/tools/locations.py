from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import LocationInput
from freshservice_toolkit.tools._common import MAX_PER_PAGE, shape_all, take

_ADDRESS_PARTS = ("line1", "line2", "city", "state", "zipcode", "country")


def _location_summary(payload: Dict[str, Any]) -> Dict[str, Any]:
    location = dict(payload)
    address = payload.get("address")
    if isinstance(address, dict):
        parts = [str(address[k]) for k in _ADDRESS_PARTS if address.get(k)]
        location["full_address"] = ", ".join(parts) or None
    else:
        location["full_address"] = None
    return location


def list_locations(
    client: FreshserviceClient,
    *,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    records = client.get(
        "locations",
        "locations",
        params={"per_page": MAX_PER_PAGE},
        environment=environment,
    )
    return shape_all(take(records, limit), _location_summary)


def get_location(
    client: FreshserviceClient, location_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    location = client.get_one(
        f"locations/{location_id}", "location", environment=environment
    )
    return _location_summary(location) if isinstance(location, dict) else None


def create_location(
    client: FreshserviceClient,
    data: LocationInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    if not data.name:
        raise ValueError("name is required to create a location.")
    created = client.post(
        "locations", "location", data.to_body(), environment=environment
    )
    return _location_summary(created) if isinstance(created, dict) else None


def update_location(
    client: FreshserviceClient,
    location_id: int,
    data: LocationInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    body = data.to_body()
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    updated = client.put(
        f"locations/{location_id}", "location", body, environment=environment
    )
    return _location_summary(updated) if isinstance(updated, dict) else None


def delete_location(
    client: FreshserviceClient, location_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    if not client.delete(f"locations/{location_id}", environment=environment):
        return None
    return {"id": location_id, "deleted": True}
