"""Game event data models and the predefined events."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

REMOVE_RANDOM_ITEM = "remove_random"


class EventType(Enum):
    """Tag describing how an event affects the survivor."""

    DANGER = "danger"
    POSITIVE = "positive"
    NEUTRAL = "neutral"


@dataclass
class EventEffects:
    """Health, max-health and item effects of an event."""

    health: int = 0
    max_health: int = 0
    # Catalog item ids, or the single token ``remove_random``
    items: List[str] = field(default_factory=list)

    @property
    def removes_random_item(self) -> bool:
        return bool(self.items) and self.items[0] == REMOVE_RANDOM_ITEM

    def to_dict(self) -> Dict[str, Any]:
        return {"health": self.health, "maxHealth": self.max_health, "items": list(self.items)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventEffects":
        return cls(
            health=int(data.get("health", 0)),
            max_health=int(data.get("maxHealth", 0)),
            items=[str(item_id) for item_id in data.get("items", [])],
        )


@dataclass
class GameEvent:
    """A scripted situation applied to a character."""

    id: str
    title: str
    description: str = ""
    type: EventType = EventType.NEUTRAL
    effects: EventEffects = field(default_factory=EventEffects)
    is_custom: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "effects": self.effects.to_dict(),
            "isCustom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameEvent":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            type=EventType(data.get("type", EventType.NEUTRAL.value)),
            effects=EventEffects.from_dict(data.get("effects", {})),
            is_custom=bool(data.get("isCustom", False)),
        )


DEFAULT_EVENTS = [
    GameEvent(
        id="zombie_attack",
        title="Zombie attack",
        description="A zombie ambushes you. You take damage.",
        type=EventType.DANGER,
        effects=EventEffects(health=-3),
    ),
    GameEvent(
        id="find_medicine",
        title="First aid kit found",
        description="You find a first aid kit in an abandoned cupboard.",
        type=EventType.POSITIVE,
        effects=EventEffects(items=["botiquin"]),
    ),
    GameEvent(
        id="find_food",
        title="Canned food",
        description="You find several cans of food in good condition.",
        type=EventType.POSITIVE,
        effects=EventEffects(items=["lata_conserva", "lata_conserva"]),
    ),
    GameEvent(
        id="find_water",
        title="Drinking water",
        description="You find unopened bottles of water.",
        type=EventType.POSITIVE,
        effects=EventEffects(items=["botella_agua", "botella_agua"]),
    ),
    GameEvent(
        id="find_ammo",
        title="Ammunition",
        description="You find ammunition on a corpse.",
        type=EventType.POSITIVE,
        effects=EventEffects(items=["municion_9mm"]),
    ),
    GameEvent(
        id="heal_rest",
        title="Restful sleep",
        description="You find a safe place to rest and recover some health.",
        type=EventType.POSITIVE,
        effects=EventEffects(health=2),
    ),
    GameEvent(
        id="increase_max_health",
        title="Physical training",
        description="After days of exercise your physical endurance improves.",
        type=EventType.POSITIVE,
        effects=EventEffects(health=1, max_health=1),
    ),
    GameEvent(
        id="lose_supplies",
        title="Ambush",
        description="A group of bandits ambushes you and you lose some supplies.",
        type=EventType.DANGER,
        effects=EventEffects(health=-1, items=[REMOVE_RANDOM_ITEM]),
    ),
]
