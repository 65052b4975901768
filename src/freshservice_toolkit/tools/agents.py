from __future__ import annotations

from typing import Any, Dict, List, Optional

from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.models import AgentUpdateInput
from freshservice_toolkit.core.payload import full_name
from freshservice_toolkit.tools._common import MAX_PER_PAGE, shape_all, take

AGENT_STATES = ("fulltime", "occasional")


def _agent_profile(payload: Dict[str, Any]) -> Dict[str, Any]:
    agent = dict(payload)
    agent["full_name"] = full_name(payload.get("first_name"), payload.get("last_name"))
    return agent


def list_agents(
    client: FreshserviceClient,
    *,
    email: Optional[str] = None,
    active: Optional[bool] = None,
    state: Optional[str] = None,
    limit: Optional[int] = None,
    environment: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """List agents; `state` is fulltime or occasional."""
    if state is not None and state not in AGENT_STATES:
        raise ValueError(f"state must be one of: {', '.join(AGENT_STATES)}")

    params: Dict[str, Any] = {"per_page": MAX_PER_PAGE}
    if email:
        params["email"] = email
    if active is not None:
        params["active"] = "true" if active else "false"
    if state:
        params["state"] = state

    records = client.get("agents", "agents", params=params, environment=environment)
    return shape_all(take(records, limit), _agent_profile)


def get_agent(
    client: FreshserviceClient, agent_id: int, *, environment: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    agent = client.get_one(f"agents/{agent_id}", "agent", environment=environment)
    return _agent_profile(agent) if isinstance(agent, dict) else None


def update_agent(
    client: FreshserviceClient,
    agent_id: int,
    data: AgentUpdateInput,
    *,
    environment: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    body = data.to_body()
    if not body:
        raise ValueError("Nothing to update; provide at least one field.")
    updated = client.put(f"agents/{agent_id}", "agent", body, environment=environment)
    return _agent_profile(updated) if isinstance(updated, dict) else None
