"""MCP tool implementations for game events."""

from typing import Any, Dict, List, Optional

from config.logging_config import get_logger

from ..core.result_pattern import result_to_response
from .event_manager import EventManager

logger = get_logger(__name__)

# Initialized by main.py
event_manager: Optional[EventManager] = None

NOT_INITIALIZED = {"success": False, "message": "Event manager not initialized"}


def initialize_event_tools(manager: EventManager) -> None:
    """
    Initialize event tools with required dependencies.

    Args:
        manager: Event manager
    """
    global event_manager
    event_manager = manager
    logger.info("Event MCP tools initialized")


def register_event_tools(mcp_server) -> None:
    """
    Register event tools with the MCP server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
    """
    mcp_server.tool()(list_events)
    mcp_server.tool()(trigger_event)
    mcp_server.tool()(create_custom_event)
    mcp_server.tool()(update_custom_event)
    mcp_server.tool()(delete_custom_event)
    mcp_server.tool()(get_event_log)
    mcp_server.tool()(clear_event_log)
    logger.info("Event MCP tools registered")


async def list_events() -> Dict[str, Any]:
    """List predefined and custom events."""
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(event_manager.list_events(), lambda events: [e.to_dict() for e in events])


async def trigger_event(character_id: str, event_id: str) -> Dict[str, Any]:
    """
    Apply an event to a character.

    Returns:
        Updated character and the event log entry
    """
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(
        event_manager.trigger_event(character_id, event_id), lambda outcome: outcome.to_dict()
    )


async def create_custom_event(
    title: str,
    description: str = "",
    event_type: str = "neutral",
    health: int = 0,
    max_health: int = 0,
    items: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Create a custom event.

    Args:
        title: Event title (required)
        description: What happens
        event_type: danger, positive or neutral
        health: Health change
        max_health: Max health change
        items: Catalog item ids to give, or ["remove_random"]
    """
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(
        event_manager.create_custom_event(
            title=title,
            description=description,
            event_type=event_type,
            health=health,
            max_health=max_health,
            items=items,
        ),
        lambda event: event.to_dict(),
    )


async def update_custom_event(
    event_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    event_type: Optional[str] = None,
    health: Optional[int] = None,
    max_health: Optional[int] = None,
    items: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Update fields of a custom event; omitted fields keep their values."""
    if not event_manager:
        return NOT_INITIALIZED
    changes = {
        key: value
        for key, value in {
            "title": title,
            "description": description,
            "event_type": event_type,
            "health": health,
            "max_health": max_health,
            "items": items,
        }.items()
        if value is not None
    }
    return result_to_response(
        event_manager.update_custom_event(event_id, **changes), lambda event: event.to_dict()
    )


async def delete_custom_event(event_id: str) -> Dict[str, Any]:
    """Delete a custom event."""
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(event_manager.delete_custom_event(event_id))


async def get_event_log(character_id: str) -> Dict[str, Any]:
    """Return a character's event log, newest entry first."""
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(event_manager.get_event_log(character_id))


async def clear_event_log(character_id: str) -> Dict[str, Any]:
    """Clear a character's event log."""
    if not event_manager:
        return NOT_INITIALIZED
    return result_to_response(event_manager.clear_event_log(character_id))
