"""Data models for catalog entries and item instances."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.error_handling import DataIntegrityError


class ItemType(Enum):
    """Closed set of item categories."""

    WEAPON = "weapon"
    AMMO = "ammo"
    FOOD = "food"
    WATER = "water"
    MEDICINE = "medicine"
    TOOL = "tool"
    RESOURCE = "resource"
    CLOTHING = "clothing"
    MISC = "misc"


# Item types that may carry a health restore value
RESTORATIVE_TYPES = frozenset({ItemType.FOOD, ItemType.WATER, ItemType.MEDICINE})


@dataclass(frozen=True)
class StatDefinition:
    """One of the five base attributes."""

    id: str
    label: str
    description: str


@dataclass(frozen=True)
class SkillDefinition:
    """A personal or special skill."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class ItemDefinition:
    """Catalog template for an item."""

    id: str
    name: str
    description: str
    type: ItemType
    image: str
    stackable: bool = False
    quantity: int = 1
    max_stack: int = 1
    weight: float = 1.0
    usable: bool = True
    consumable: bool = False
    damage: Optional[int] = None
    health_restore: Optional[int] = None

    def create_item(self) -> "Item":
        """Create a fresh, independent item instance from this template."""
        return Item(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            stackable=self.stackable,
            quantity=self.quantity,
            max_stack=self.max_stack,
            weight=self.weight,
            image=self.image,
            usable=self.usable,
            consumable=self.consumable,
            damage=self.damage,
            health_restore=self.health_restore,
        )


@dataclass
class Item:
    """An item instance carried by a character."""

    id: str
    name: str
    description: str = ""
    type: ItemType = ItemType.MISC
    stackable: bool = False
    quantity: int = 1
    max_stack: int = 1
    weight: float = 1.0
    image: str = "📦"
    usable: bool = True
    consumable: bool = False
    damage: Optional[int] = None
    health_restore: Optional[int] = None

    @property
    def total_weight(self) -> float:
        return self.weight * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted record layout."""
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "stackable": self.stackable,
            "quantity": self.quantity,
            "maxStack": self.max_stack,
            "weight": self.weight,
            "image": self.image,
            "usable": self.usable,
            "consumable": self.consumable,
        }
        if self.damage is not None:
            data["damage"] = self.damage
        if self.health_restore is not None:
            data["healthRestore"] = self.health_restore
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        """
        Create from the persisted record layout.

        Raises:
            DataIntegrityError: quantity is outside 1..maxStack
        """
        item = cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            type=ItemType(data.get("type", ItemType.MISC.value)),
            stackable=bool(data.get("stackable", False)),
            quantity=int(data.get("quantity", 1)),
            max_stack=int(data.get("maxStack", 1)),
            weight=data.get("weight", 1.0),
            image=data.get("image", "📦"),
            usable=bool(data.get("usable", True)),
            consumable=bool(data.get("consumable", False)),
            damage=data.get("damage"),
            health_restore=data.get("healthRestore"),
        )
        if not 1 <= item.quantity <= item.max_stack:
            raise DataIntegrityError(
                f"Item {item.id} has quantity {item.quantity} outside 1..{item.max_stack}", source="item"
            )
        return item

    def copy(self) -> "Item":
        return Item(**asdict(self))
