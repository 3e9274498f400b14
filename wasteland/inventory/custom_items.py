"""User-authored items and the library that remembers them for reuse."""

import json
import time
import uuid
from typing import Any, Dict, List, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..catalog.models import RESTORATIVE_TYPES, Item, ItemType
from ..core.error_handling import DataIntegrityError
from ..core.result_pattern import AppError, ErrorKind, validation_error, with_result
from ..persistence.kv_store import KeyValueStore

logger = get_logger(__name__)

CUSTOM_ITEMS_KEY = "zombie_custom_items"

DEFAULT_CUSTOM_MAX_STACK = 10
DEFAULT_CUSTOM_IMAGE = "📦"


def generate_custom_id() -> str:
    return f"custom_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def build_custom_item(data: Dict[str, Any]) -> Result[Item, AppError]:
    """
    Validate user input and build a new custom item.

    Args:
        data: Item fields. Only ``name`` is required; ``type`` defaults to misc,
            ``max_stack`` to 10, ``weight`` to 1 and ``image`` to a box glyph.

    Returns:
        Success with an item carrying a fresh ``custom_`` id, or a validation
        Failure naming the offending field.
    """
    name = str(data.get("name") or "").strip()
    if not name:
        return Failure(validation_error("Item name is required", field="name"))

    try:
        item_type = ItemType(data.get("type") or ItemType.MISC.value)
    except ValueError:
        return Failure(validation_error(f"Unknown item type: {data.get('type')}", field="type"))

    try:
        stackable = bool(data.get("stackable", False))
        max_stack = int(data.get("max_stack", DEFAULT_CUSTOM_MAX_STACK))
        quantity = int(data.get("quantity", 1))
        weight = float(data.get("weight", 1.0))
        damage = data.get("damage")
        damage = int(damage) if damage is not None else None
        health_restore = data.get("health_restore")
        health_restore = int(health_restore) if health_restore is not None else None
    except (TypeError, ValueError) as e:
        return Failure(validation_error(f"Invalid numeric value: {e}"))

    if max_stack < 1:
        return Failure(validation_error("Max stack must be at least 1", field="max_stack"))
    if not stackable and quantity != 1:
        return Failure(validation_error("Non-stackable items have a quantity of 1", field="quantity"))
    if not 1 <= quantity <= max_stack:
        return Failure(
            validation_error(f"Quantity must be between 1 and {max_stack}", field="quantity")
        )
    if weight < 0:
        return Failure(validation_error("Weight cannot be negative", field="weight"))
    if damage is not None and item_type != ItemType.WEAPON:
        return Failure(validation_error("Only weapons can deal damage", field="damage"))
    if health_restore is not None:
        if item_type not in RESTORATIVE_TYPES:
            return Failure(
                validation_error("Only food, water and medicine restore health", field="health_restore")
            )
        if health_restore < 0:
            return Failure(validation_error("Health restore cannot be negative", field="health_restore"))

    return Success(
        Item(
            id=generate_custom_id(),
            name=name,
            description=str(data.get("description") or ""),
            type=item_type,
            stackable=stackable,
            quantity=quantity,
            max_stack=max_stack,
            weight=weight,
            image=data.get("image") or DEFAULT_CUSTOM_IMAGE,
            usable=bool(data.get("usable", True)),
            consumable=bool(data.get("consumable", False)),
            damage=damage,
            health_restore=health_restore,
        )
    )


class CustomItemLibrary:
    """Custom items created by the player, kept across characters."""

    def __init__(self, store: KeyValueStore, key: str = CUSTOM_ITEMS_KEY) -> None:
        self.store = store
        self.key = key

    def _read(self) -> List[Item]:
        try:
            raw = self.store.get(self.key)
            if raw is None:
                return []
            return [Item.from_dict(entry) for entry in json.loads(raw)]
        except (DataIntegrityError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error("Custom item library is corrupt, treating as empty", error=str(e))
            return []

    @with_result(error_kind=ErrorKind.STORAGE)
    def list_items(self) -> Result[List[Item], AppError]:
        return Success(self._read())

    @with_result(error_kind=ErrorKind.STORAGE)
    def get(self, item_id: str) -> Result[Optional[Item], AppError]:
        for item in self._read():
            if item.id == item_id:
                return Success(item)
        return Success(None)

    @with_result(error_kind=ErrorKind.STORAGE)
    def remember(self, item: Item) -> Result[Item, AppError]:
        """Store a template copy of the item (quantity 1), replacing any with the same id."""
        template = item.copy()
        template.quantity = 1
        items = [existing for existing in self._read() if existing.id != item.id]
        items.append(template)
        self.store.set(self.key, json.dumps([i.to_dict() for i in items], ensure_ascii=False))
        logger.debug("Custom item remembered", item_id=item.id, name=item.name)
        return Success(template)
