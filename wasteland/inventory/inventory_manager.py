"""
Capacity-bounded inventory for saved characters.

Every operation loads the character, applies the change to that fresh
copy and saves it before returning, so a failed write leaves the stored
record as it was.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..catalog.data import create_item_copy
from ..catalog.models import Item
from ..character_creation.models import Character
from ..core.notifications import HealthChange, HealthNotifier
from ..core.result_pattern import AppError, capacity_error, not_found_error, validation_error
from ..persistence.save_store import SaveStore
from .custom_items import CustomItemLibrary, build_custom_item

logger = get_logger(__name__)


def is_full(character: Character) -> bool:
    return len(character.inventory) >= character.inventory_capacity


def add_to_inventory(character: Character, item: Item) -> Optional[AppError]:
    """
    Add an item in place, merging into an existing stack when it fits.

    A stackable item merges with the first stack of the same id when the
    combined quantity stays within ``max_stack``; otherwise it becomes a new
    stack. The capacity check comes first and counts stacks, not units.

    Returns:
        None on success, or a capacity error when the backpack is full.
    """
    if is_full(character):
        return capacity_error(
            f"Backpack is full ({character.inventory_capacity} items)",
            character.inventory_capacity,
        )

    if item.stackable:
        existing = next((i for i in character.inventory if i.id == item.id), None)
        if existing is not None and existing.quantity + item.quantity <= existing.max_stack:
            existing.quantity += item.quantity
            return None

    character.inventory.append(item.copy())
    return None


@dataclass
class ItemUseOutcome:
    """Result of using an item."""

    character: Character
    item: Item
    consumed: bool
    health_restored: int = 0
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character": self.character.to_dict(),
            "item": self.item.to_dict(),
            "consumed": self.consumed,
            "health_restored": self.health_restored,
            "message": self.message,
        }


@dataclass
class InventorySummary:
    """Counts and weight of a character's inventory."""

    item_count: int
    capacity: int
    total_weight: float
    items: List[Item] = field(default_factory=list)

    @property
    def free_slots(self) -> int:
        return max(0, self.capacity - self.item_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_count": self.item_count,
            "capacity": self.capacity,
            "free_slots": self.free_slots,
            "total_weight": round(self.total_weight, 2),
            "items": [item.to_dict() for item in self.items],
        }


class InventoryManager:
    """Add, remove, use and restack items of saved characters."""

    def __init__(
        self,
        save_store: SaveStore,
        notifier: HealthNotifier,
        custom_items: Optional[CustomItemLibrary] = None,
    ) -> None:
        self.save_store = save_store
        self.notifier = notifier
        self.custom_items = custom_items or CustomItemLibrary(save_store.store)

    def _persist(self, character: Character) -> Result[Character, AppError]:
        character.touch()
        return self.save_store.save(character)

    def _item_at(self, character: Character, index: int) -> Result[Item, AppError]:
        if not 0 <= index < len(character.inventory):
            return Failure(not_found_error("Inventory item", index))
        return Success(character.inventory[index])

    def add_item(self, character_id: str, item: Item) -> Result[Character, AppError]:
        """Add a fully specified item."""
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        error = add_to_inventory(character, item)
        if error is not None:
            return Failure(error)

        logger.info("Item added", character_id=character_id, item_id=item.id, quantity=item.quantity)
        return self._persist(character)

    def add_catalog_item(
        self, character_id: str, item_id: str, quantity: Optional[int] = None
    ) -> Result[Character, AppError]:
        """Add an item by catalog id, falling back to the custom item library."""
        item = create_item_copy(item_id)
        if item is None:
            found = self.custom_items.get(item_id)
            if isinstance(found, Failure):
                return found
            item = found.unwrap()
        if item is None:
            return Failure(not_found_error("Item", item_id))

        if quantity is not None:
            if not item.stackable and quantity != 1:
                return Failure(validation_error(f"{item.name} cannot be stacked", field="quantity"))
            if not 1 <= quantity <= item.max_stack:
                return Failure(
                    validation_error(f"Quantity must be between 1 and {item.max_stack}", field="quantity")
                )
            item.quantity = quantity
        return self.add_item(character_id, item)

    def create_custom_item(self, character_id: str, data: Dict[str, Any]) -> Result[Character, AppError]:
        """Validate a user-authored item, add it and remember it for reuse."""
        built = build_custom_item(data)
        if isinstance(built, Failure):
            return built
        item = built.unwrap()

        added = self.add_item(character_id, item)
        if isinstance(added, Failure):
            return added

        remembered = self.custom_items.remember(item)
        if isinstance(remembered, Failure):
            logger.warning("Custom item not saved to library", item_id=item.id, error=str(remembered.failure()))
        return added

    def remove_item(self, character_id: str, index: int) -> Result[Character, AppError]:
        """Remove a whole stack by position."""
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        found = self._item_at(character, index)
        if isinstance(found, Failure):
            return found
        removed = character.inventory.pop(index)
        logger.info("Item removed", character_id=character_id, item_id=removed.id)
        return self._persist(character)

    def use_item(self, character_id: str, index: int) -> Result[ItemUseOutcome, AppError]:
        """
        Use an item.

        Consumables lose one unit (the stack is removed at quantity 1) and
        restore health up to the maximum. Usable items that are not
        consumable only report their description and change nothing.
        """
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        found = self._item_at(character, index)
        if isinstance(found, Failure):
            return found
        item = found.unwrap()

        if not item.usable:
            return Failure(validation_error(f"{item.name} cannot be used", field="item"))
        if not item.consumable:
            return Success(
                ItemUseOutcome(
                    character=character,
                    item=item.copy(),
                    consumed=False,
                    message=f"You use {item.name}. {item.description}".strip(),
                )
            )

        restored = 0
        if item.health_restore and item.health_restore > 0:
            new_health = min(character.health.current + item.health_restore, character.health.max)
            restored = new_health - character.health.current
            character.health.current = new_health

        used = item.copy()
        if item.quantity > 1:
            item.quantity -= 1
        else:
            character.inventory.pop(index)

        saved = self._persist(character)
        if isinstance(saved, Failure):
            return saved

        if restored > 0:
            self.notifier.publish(
                HealthChange(character.id, character.health.current, character.health.max)
            )
        logger.info("Item used", character_id=character_id, item_id=used.id, health_restored=restored)
        message = f"You use {used.name}."
        if restored > 0:
            message += f" +{restored} health."
        return Success(
            ItemUseOutcome(
                character=saved.unwrap(),
                item=used,
                consumed=True,
                health_restored=restored,
                message=message,
            )
        )

    def change_quantity(self, character_id: str, index: int, quantity: int) -> Result[Character, AppError]:
        """Set the quantity of a stackable item."""
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        found = self._item_at(character, index)
        if isinstance(found, Failure):
            return found
        item = found.unwrap()

        if not item.stackable:
            return Failure(validation_error(f"{item.name} cannot be stacked", field="quantity"))
        if not 1 <= quantity <= item.max_stack:
            return Failure(
                validation_error(f"Quantity must be between 1 and {item.max_stack}", field="quantity")
            )
        item.quantity = quantity
        return self._persist(character)

    def summary(self, character_id: str) -> Result[InventorySummary, AppError]:
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()
        return Success(
            InventorySummary(
                item_count=len(character.inventory),
                capacity=character.inventory_capacity,
                total_weight=sum(item.total_weight for item in character.inventory),
                items=list(character.inventory),
            )
        )
