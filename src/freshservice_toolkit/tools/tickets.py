from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.choices import ChoiceCache
from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import (
    Attachment,
    TicketCreateInput,
    TicketUpdateInput,
)
from freshservice_toolkit.core.multipart import encode_multipart
from freshservice_toolkit.tools._common import (
    MAX_PER_PAGE,
    quoted_query,
    shape_all,
    take,
)

CHOICE_FIELDS = ("status", "priority", "source", "urgency", "impact")
DEFAULT_STATUS = 2  # Open
DEFAULT_PRIORITY = 1  # Low


def _ticket_summary(payload: Dict[str, Any], choices: ChoiceCache) -> Dict[str, Any]:
    ticket = dict(payload)
    for field in ("status", "priority", "source"):
        ticket[f"{field}_name"] = choices.label(field, payload.get(field))
    return ticket


def _resolve_choices(body: Dict[str, Any], choices: ChoiceCache) -> Dict[str, Any]:
    for field in CHOICE_FIELDS:
        if field in body:
            body[field] = choices.code(field, body[field])
    return body


def list_tickets(
    client: FreshserviceClient,
    *,
    view: Optional[str] = None,
    requester_email: Optional[str] = None,
    updated_since: Optional[str] = None,
    include: Optional[str] = None,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
    choices: Optional[ChoiceCache] = None,
) -> List[Dict[str, Any]]:
    """
    List tickets, newest first.
    `view` is one of the predefined filters (new_and_my_open, watching, spam, deleted).
    """
    choices = choices or ChoiceCache()
    params: Dict[str, Any] = {"per_page": MAX_PER_PAGE}
    if view:
        params["filter"] = view
    if requester_email:
        params["email"] = requester_email
    if updated_since:
        params["updated_since"] = updated_since
    if include:
        params["include"] = include

    records = client.get("tickets", "tickets", params=params, environment=environment)
    return shape_all(take(records, limit), lambda t: _ticket_summary(t, choices))


def filter_tickets(
    client: FreshserviceClient,
    query: str,
    *,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
    choices: Optional[ChoiceCache] = None,
) -> List[Dict[str, Any]]:
    """
    Search tickets with the query language, e.g. `priority:4 AND status:2`.
    The filter endpoint reports a `total` and is paged by page number.
    """
    choices = choices or ChoiceCache()
    records = client.get(
        "tickets/filter",
        "tickets",
        params={"query": quoted_query(query)},
        environment=environment,
    )
    return shape_all(take(records, limit), lambda t: _ticket_summary(t, choices))


def get_ticket(
    client: FreshserviceClient,
    ticket_id: int,
    *,
    include: Optional[str] = None,
    environment: Optional[str] = None,
    choices: Optional[ChoiceCache] = None,
) -> Optional[Dict[str, Any]]:
    """Fetch one ticket; None when it does not exist."""
    choices = choices or ChoiceCache()
    params = {"include": include} if include else None
    ticket = client.get_one(
        f"tickets/{ticket_id}", "ticket", params=params, environment=environment
    )
    return _ticket_summary(ticket, choices) if isinstance(ticket, dict) else None


def create_ticket(
    client: FreshserviceClient,
    data: TicketCreateInput,
    *,
    environment: Optional[str] = None,
    choices: Optional[ChoiceCache] = None,
) -> Optional[Dict[str, Any]]:
    """
    Create a ticket. Status and priority default to Open/Low and accept either
    codes or labels. Attachments switch the request to multipart/form-data.
    """
    if not data.email and data.requester_id is None:
        raise ValueError("Provide either email or requester_id for the requester.")

    choices = choices or ChoiceCache()
    body = _resolve_choices(data.to_body(), choices)
    body.setdefault("status", DEFAULT_STATUS)
    body.setdefault("priority", DEFAULT_PRIORITY)

    if data.attachment_paths:
        attachments = [Attachment.from_path(p) for p in data.attachment_paths]
        created = client.post(
            "tickets",
            "ticket",
            encode_multipart(body, attachments),
            environment=environment,
        )
    else:
        created = client.post("tickets", "ticket", body, environment=environment)
    return _ticket_summary(created, choices) if isinstance(created, dict) else None


def update_ticket(
    client: FreshserviceClient,
    data: TicketUpdateInput,
    *,
    environment: Optional[str] = None,
    choices: Optional[ChoiceCache] = None,
) -> Optional[Dict[str, Any]]:
    """Only provided fields are changed; others are left untouched."""
    choices = choices or ChoiceCache()
    body = _resolve_choices(data.to_body(), choices)
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    updated = client.put(
        f"tickets/{data.id}", "ticket", body, environment=environment
    )
    return _ticket_summary(updated, choices) if isinstance(updated, dict) else None


def delete_ticket(
    client: FreshserviceClient, ticket_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """Move a ticket to trash; `restore_ticket` brings it back. None when absent."""
    if not client.delete(f"tickets/{ticket_id}", environment=environment):
        return None
    return {"id": ticket_id, "deleted": True}


def restore_ticket(
    client: FreshserviceClient, ticket_id: int, *, environment: Optional[str] = None
) -> Dict[str, Any]:
    client.put(f"tickets/{ticket_id}/restore", environment=environment)
    return {"id": ticket_id, "restored": True}


def add_ticket_note(
    client: FreshserviceClient,
    ticket_id: int,
    body: str,
    *,
    private: bool = True,
    notify_emails: Optional[List[str]] = None,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Add a note (private by default) to a ticket."""
    if not body or not body.strip():
        raise ValueError("Note body must not be empty.")
    payload: Dict[str, Any] = {"body": body, "private": private}
    if notify_emails:
        payload["notify_emails"] = notify_emails
    return client.post(
        f"tickets/{ticket_id}/notes",
        "conversation",
        payload,
        environment=environment,
    )


def list_ticket_conversations(
    client: FreshserviceClient,
    ticket_id: int,
    *,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    records = client.get(
        f"tickets/{ticket_id}/conversations",
        "conversations",
        environment=environment,
    )
    return shape_all(
        take(records, limit),
        lambda c: {**c, "kind": "note" if c.get("private") else "reply"},
    )
