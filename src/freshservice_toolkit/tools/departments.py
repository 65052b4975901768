from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import DepartmentInput
from freshservice_toolkit.tools._common import MAX_PER_PAGE, take


def list_departments(
    client: FreshserviceClient,
    *,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    records = client.get(
        "departments",
        "departments",
        params={"per_page": MAX_PER_PAGE},
        environment=environment,
    )
    return take(records, limit)


def get_department(
    client: FreshserviceClient, department_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    return client.get_one(
        f"departments/{department_id}", "department", environment=environment
    )


def create_department(
    client: FreshserviceClient,
    data: DepartmentInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    if not data.name:
        raise ValueError("name is required to create a department.")
    return client.post(
        "departments", "department", data.to_body(), environment=environment
    )


def update_department(
    client: FreshserviceClient,
    department_id: int,
    data: DepartmentInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    body = data.to_body()
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    return client.put(
        f"departments/{department_id}", "department", body, environment=environment
    )


def delete_department(
    client: FreshserviceClient, department_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    if not client.delete(f"departments/{department_id}", environment=environment):
        return None
    return {"id": department_id, "deleted": True}
