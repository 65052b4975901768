"""
Tool namespace for the Freshservice toolkit.

Each module wraps one resource family; the registry discovers them for MCP.
"""

from .agents import get_agent, list_agents, update_agent
from .assets import create_asset, delete_asset, get_asset, list_assets, update_asset
from .custom_objects import (
    create_custom_object_record,
    delete_custom_object_record,
    list_custom_object_records,
    list_custom_objects,
    update_custom_object_record,
)
from .departments import (
    create_department,
    delete_department,
    get_department,
    list_departments,
    update_department,
)
from .locations import (
    create_location,
    delete_location,
    get_location,
    list_locations,
    update_location,
)
from .requesters import (
    create_requester,
    deactivate_requester,
    get_requester,
    list_requesters,
    update_requester,
)
from .tickets import (
    add_ticket_note,
    create_ticket,
    delete_ticket,
    filter_tickets,
    get_ticket,
    list_ticket_conversations,
    list_tickets,
    restore_ticket,
    update_ticket,
)

__all__ = [
    "list_agents",
    "get_agent",
    "update_agent",
    "list_assets",
    "get_asset",
    "create_asset",
    "update_asset",
    "delete_asset",
    "list_custom_objects",
    "list_custom_object_records",
    "create_custom_object_record",
    "update_custom_object_record",
    "delete_custom_object_record",
    "list_departments",
    "get_department",
    "create_department",
    "update_department",
    "delete_department",
    "list_locations",
    "get_location",
    "create_location",
    "update_location",
    "delete_location",
    "list_requesters",
    "get_requester",
    "create_requester",
    "update_requester",
    "deactivate_requester",
    "list_tickets",
    "filter_tickets",
    "get_ticket",
    "create_ticket",
    "update_ticket",
    "delete_ticket",
    "restore_ticket",
    "add_ticket_note",
    "list_ticket_conversations",
]
