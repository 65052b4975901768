from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """One entry of a 400 validation response (`errors[]`)."""

    field: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class Attachment(BaseModel):
    filename: str
    content: bytes

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_path(cls, file_path: str, filename: Optional[str] = None) -> "Attachment":
        # Imported lazily: errors depends on models.
        from .errors import FreshserviceClientError

        path = Path(file_path)
        if not path.is_file():
            raise FreshserviceClientError(f"File not found: {file_path}")
        return cls(filename=filename or path.name, content=path.read_bytes())


# --- Input Models (Tool Payloads) ---


class _Input(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_body(self) -> Dict[str, Any]:
        """Serialize for the wire; absent fields are never emitted."""
        return self.model_dump(exclude_none=True)


class TicketCreateInput(_Input):
    subject: str
    description: str
    email: Optional[str] = None
    requester_id: Optional[int] = None
    phone: Optional[str] = None
    status: Optional[int | str] = None
    priority: Optional[int | str] = None
    source: Optional[int | str] = None
    urgency: Optional[int | str] = None
    impact: Optional[int | str] = None
    type: Optional[str] = None
    responder_id: Optional[int] = None
    group_id: Optional[int] = None
    department_id: Optional[int] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    item_category: Optional[str] = None
    due_by: Optional[str] = None
    fr_due_by: Optional[str] = None
    cc_emails: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    custom_fields: Optional[Dict[str, Any]] = None
    attachment_paths: Optional[List[str]] = Field(default=None, exclude=True)


class TicketUpdateInput(_Input):
    id: int = Field(exclude=True)
    subject: Optional[str] = None
    description: Optional[str] = None
    status: Optional[int | str] = None
    priority: Optional[int | str] = None
    source: Optional[int | str] = None
    urgency: Optional[int | str] = None
    impact: Optional[int | str] = None
    type: Optional[str] = None
    responder_id: Optional[int] = None
    group_id: Optional[int] = None
    department_id: Optional[int] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    item_category: Optional[str] = None
    due_by: Optional[str] = None
    tags: Optional[List[str]] = None
    custom_fields: Optional[Dict[str, Any]] = None


class RequesterInput(_Input):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    primary_email: Optional[str] = None
    secondary_emails: Optional[List[str]] = None
    job_title: Optional[str] = None
    work_phone_number: Optional[str] = None
    mobile_phone_number: Optional[str] = None
    department_ids: Optional[List[int]] = None
    reporting_manager_id: Optional[int] = None
    location_id: Optional[int] = None
    language: Optional[str] = None
    time_zone: Optional[str] = None
    custom_fields: Optional[Dict[str, Any]] = None


class AgentUpdateInput(_Input):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    occasional: Optional[bool] = None
    job_title: Optional[str] = None
    work_phone_number: Optional[str] = None
    mobile_phone_number: Optional[str] = None
    department_ids: Optional[List[int]] = None
    location_id: Optional[int] = None
    reporting_manager_id: Optional[int] = None
    time_zone: Optional[str] = None


class DepartmentInput(_Input):
    name: Optional[str] = None
    description: Optional[str] = None
    head_user_id: Optional[int] = None
    prime_user_id: Optional[int] = None
    domains: Optional[List[str]] = None
    custom_fields: Optional[Dict[str, Any]] = None


class LocationInput(_Input):
    name: Optional[str] = None
    parent_location_id: Optional[int] = None
    primary_contact_id: Optional[int] = None
    line1: Optional[str] = Field(default=None, exclude=True)
    line2: Optional[str] = Field(default=None, exclude=True)
    city: Optional[str] = Field(default=None, exclude=True)
    state: Optional[str] = Field(default=None, exclude=True)
    country: Optional[str] = Field(default=None, exclude=True)
    zipcode: Optional[str] = Field(default=None, exclude=True)

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        address = {
            key: getattr(self, key)
            for key in ("line1", "line2", "city", "state", "country", "zipcode")
            if getattr(self, key) is not None
        }
        if address:
            body["address"] = address
        return body


class AssetInput(_Input):
    name: Optional[str] = None
    asset_type_id: Optional[int] = None
    asset_tag: Optional[str] = None
    impact: Optional[str] = None
    usage_type: Optional[str] = None
    description: Optional[str] = None
    user_id: Optional[int] = None
    location_id: Optional[int] = None
    department_id: Optional[int] = None
    agent_id: Optional[int] = None
    group_id: Optional[int] = None
    assigned_on: Optional[str] = None
    type_fields: Optional[Dict[str, Any]] = None


class CustomObjectRecordInput(_Input):
    data: Dict[str, Any]

    def to_body(self) -> Dict[str, Any]:
        return {"data": {k: v for k, v in self.data.items() if v is not None}}
