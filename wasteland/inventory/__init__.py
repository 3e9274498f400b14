"""Character inventory and custom items."""

from .custom_items import CUSTOM_ITEMS_KEY, CustomItemLibrary, build_custom_item
from .inventory_manager import (
    InventoryManager,
    InventorySummary,
    ItemUseOutcome,
    add_to_inventory,
    is_full,
)

__all__ = [
    "CUSTOM_ITEMS_KEY",
    "CustomItemLibrary",
    "build_custom_item",
    "InventoryManager",
    "InventorySummary",
    "ItemUseOutcome",
    "add_to_inventory",
    "is_full",
]
