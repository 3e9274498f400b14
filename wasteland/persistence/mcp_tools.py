"""MCP tool implementations for save slots."""

from typing import Any, Dict, Optional

from config.logging_config import get_logger

from ..core.result_pattern import result_to_response
from .save_store import SaveStore

logger = get_logger(__name__)

# Initialized by main.py
save_store: Optional[SaveStore] = None

NOT_INITIALIZED = {"success": False, "message": "Save store not initialized"}


def initialize_save_tools(store: SaveStore) -> None:
    """
    Initialize save tools with required dependencies.

    Args:
        store: Save store holding every character slot
    """
    global save_store
    save_store = store
    logger.info("Save slot MCP tools initialized")


def register_save_tools(mcp_server) -> None:
    """
    Register save slot tools with the MCP server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
    """
    mcp_server.tool()(list_characters)
    mcp_server.tool()(get_character)
    mcp_server.tool()(delete_character)
    mcp_server.tool()(export_character)
    mcp_server.tool()(import_character)
    logger.info("Save slot MCP tools registered")


async def list_characters() -> Dict[str, Any]:
    """
    List saved characters, most recently played first.

    Returns:
        Summaries with id, name, level, health and timestamps
    """
    if not save_store:
        return NOT_INITIALIZED
    return result_to_response(
        save_store.list_summaries(), lambda summaries: [s.to_dict() for s in summaries]
    )


async def get_character(character_id: str) -> Dict[str, Any]:
    """Load a saved character."""
    if not save_store:
        return NOT_INITIALIZED
    return result_to_response(save_store.load(character_id), lambda character: character.to_dict())


async def delete_character(character_id: str) -> Dict[str, Any]:
    """Delete a saved character; deleting an unknown id also succeeds."""
    if not save_store:
        return NOT_INITIALIZED
    return result_to_response(save_store.delete(character_id))


async def export_character(character_id: str) -> Dict[str, Any]:
    """
    Export a character as JSON.

    Returns:
        Suggested file name and the stored record text
    """
    if not save_store:
        return NOT_INITIALIZED
    return result_to_response(save_store.export_snapshot(character_id), lambda s: s.to_dict())


async def import_character(content: str) -> Dict[str, Any]:
    """
    Import a character previously exported with ``export_character``.

    Args:
        content: Exported JSON text
    """
    if not save_store:
        return NOT_INITIALIZED
    return result_to_response(save_store.import_snapshot(content), lambda character: character.to_dict())
