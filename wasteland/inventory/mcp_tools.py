"""MCP tool implementations for character inventory."""

from typing import Any, Dict, Optional

from config.logging_config import get_logger

from ..core.result_pattern import result_to_response
from .inventory_manager import InventoryManager

logger = get_logger(__name__)

# Initialized by main.py
inventory_manager: Optional[InventoryManager] = None

NOT_INITIALIZED = {"success": False, "message": "Inventory manager not initialized"}


def initialize_inventory_tools(manager: InventoryManager) -> None:
    """
    Initialize inventory tools with required dependencies.

    Args:
        manager: Inventory manager
    """
    global inventory_manager
    inventory_manager = manager
    logger.info("Inventory MCP tools initialized")


def register_inventory_tools(mcp_server) -> None:
    """
    Register inventory tools with the MCP server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
    """
    mcp_server.tool()(get_inventory)
    mcp_server.tool()(add_item)
    mcp_server.tool()(create_custom_item)
    mcp_server.tool()(list_custom_items)
    mcp_server.tool()(use_item)
    mcp_server.tool()(remove_item)
    mcp_server.tool()(change_item_quantity)
    logger.info("Inventory MCP tools registered")


def _character_response(result) -> Dict[str, Any]:
    return result_to_response(result, lambda character: character.to_dict())


async def get_inventory(character_id: str) -> Dict[str, Any]:
    """
    Show a character's inventory.

    Returns:
        Items, item count, capacity and total weight
    """
    if not inventory_manager:
        return NOT_INITIALIZED
    return result_to_response(inventory_manager.summary(character_id), lambda s: s.to_dict())


async def add_item(character_id: str, item_id: str, quantity: Optional[int] = None) -> Dict[str, Any]:
    """
    Add a catalog or saved custom item.

    Args:
        character_id: Character receiving the item
        item_id: Catalog id or id of a saved custom item
        quantity: Units to add for stackable items
    """
    if not inventory_manager:
        return NOT_INITIALIZED
    return _character_response(inventory_manager.add_catalog_item(character_id, item_id, quantity))


async def create_custom_item(
    character_id: str,
    name: str,
    description: str = "",
    item_type: str = "misc",
    stackable: bool = False,
    quantity: int = 1,
    max_stack: int = 10,
    weight: float = 1.0,
    image: Optional[str] = None,
    usable: bool = True,
    consumable: bool = False,
    damage: Optional[int] = None,
    health_restore: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create a custom item, add it to the character and save it for reuse.

    Args:
        character_id: Character receiving the item
        name: Item name (required)
        description: Item description
        item_type: weapon, ammo, food, water, medicine, tool, resource, clothing or misc
        stackable: Whether units stack in one slot
        quantity: Starting units (1 for non-stackable items)
        max_stack: Maximum units per stack
        weight: Weight per unit
        image: Display glyph
        usable: Whether the item can be used
        consumable: Whether using it spends one unit
        damage: Damage dealt (weapons only)
        health_restore: Health restored when consumed (food, water and medicine only)
    """
    if not inventory_manager:
        return NOT_INITIALIZED
    data = {
        "name": name,
        "description": description,
        "type": item_type,
        "stackable": stackable,
        "quantity": quantity,
        "max_stack": max_stack,
        "weight": weight,
        "image": image,
        "usable": usable,
        "consumable": consumable,
        "damage": damage,
        "health_restore": health_restore,
    }
    return _character_response(inventory_manager.create_custom_item(character_id, data))


async def list_custom_items() -> Dict[str, Any]:
    """List custom items saved for reuse."""
    if not inventory_manager:
        return NOT_INITIALIZED
    return result_to_response(
        inventory_manager.custom_items.list_items(), lambda items: [item.to_dict() for item in items]
    )


async def use_item(character_id: str, index: int) -> Dict[str, Any]:
    """
    Use the item at ``index``.

    Consumables lose one unit and may restore health.
    """
    if not inventory_manager:
        return NOT_INITIALIZED
    return result_to_response(inventory_manager.use_item(character_id, index), lambda o: o.to_dict())


async def remove_item(character_id: str, index: int) -> Dict[str, Any]:
    """Drop the whole stack at ``index``."""
    if not inventory_manager:
        return NOT_INITIALIZED
    return _character_response(inventory_manager.remove_item(character_id, index))


async def change_item_quantity(character_id: str, index: int, quantity: int) -> Dict[str, Any]:
    """Set the quantity of a stackable item."""
    if not inventory_manager:
        return NOT_INITIALIZED
    return _character_response(inventory_manager.change_quantity(character_id, index, quantity))
