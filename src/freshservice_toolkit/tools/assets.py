from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import AssetInput
from freshservice_toolkit.tools._common import MAX_PER_PAGE, quoted_query, shape_all, take


def _asset_summary(payload: Dict[str, Any]) -> Dict[str, Any]:
    asset = dict(payload)
    # Asset URLs are keyed by display_id, not id.
    asset["asset_id"] = payload.get("display_id")
    return asset


def list_assets(
    client: FreshserviceClient,
    *,
    query: Optional[str] = None,
    search: Optional[str] = None,
    include_type_fields: bool = False,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List assets.
    - `query` filters with the query language, e.g. `asset_type_id:25 AND location_id:3`
    - `search` matches name, asset_tag or serial number, e.g. `name:'laptop'`
    """
    params: Dict[str, Any] = {"per_page": MAX_PER_PAGE}
    if query:
        params["filter"] = quoted_query(query)
    if search:
        params["search"] = quoted_query(search)
    if include_type_fields:
        params["include"] = "type_fields"

    records = client.get("assets", "assets", params=params, environment=environment)
    return shape_all(take(records, limit), _asset_summary)


def get_asset(
    client: FreshserviceClient,
    display_id: int,
    *,
    include_type_fields: bool = False,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    params = {"include": "type_fields"} if include_type_fields else None
    asset = client.get_one(
        f"assets/{display_id}", "asset", params=params, environment=environment
    )
    return _asset_summary(asset) if isinstance(asset, dict) else None


def create_asset(
    client: FreshserviceClient,
    data: AssetInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    if not data.name or data.asset_type_id is None:
        raise ValueError("name and asset_type_id are required to create an asset.")
    created = client.post("assets", "asset", data.to_body(), environment=environment)
    return _asset_summary(created) if isinstance(created, dict) else None


def update_asset(
    client: FreshserviceClient,
    display_id: int,
    data: AssetInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    body = data.to_body()
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    updated = client.put(
        f"assets/{display_id}", "asset", body, environment=environment
    )
    return _asset_summary(updated) if isinstance(updated, dict) else None


def delete_asset(
    client: FreshserviceClient, display_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """Move an asset to trash."""
    if not client.delete(f"assets/{display_id}", environment=environment):
        return None
    return {"asset_id": display_id, "deleted": True}
