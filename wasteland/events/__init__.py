"""Game events and per-character event logs."""

from .event_manager import CUSTOM_EVENTS_KEY, WELCOME_MESSAGE, EventManager, EventOutcome
from .models import DEFAULT_EVENTS, REMOVE_RANDOM_ITEM, EventEffects, EventType, GameEvent

__all__ = [
    "CUSTOM_EVENTS_KEY",
    "WELCOME_MESSAGE",
    "EventManager",
    "EventOutcome",
    "DEFAULT_EVENTS",
    "REMOVE_RANDOM_ITEM",
    "EventEffects",
    "EventType",
    "GameEvent",
]
