"""
Game events applied to saved characters.

Predefined events are fixed; custom events are authored by the player and
stored in a single record. Each character keeps its own event log, newest
entry first.
"""

import copy
import json
import random
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..catalog.data import ITEMS, create_item_copy
from ..character_creation.models import Character
from ..core.error_handling import DataIntegrityError
from ..core.notifications import HealthChange, HealthNotifier
from ..core.result_pattern import AppError, ErrorKind, not_found_error, validation_error, with_result
from ..inventory.inventory_manager import add_to_inventory
from ..persistence.save_store import EVENT_LOG_PREFIX, SaveStore
from .models import DEFAULT_EVENTS, REMOVE_RANDOM_ITEM, EventEffects, EventType, GameEvent

logger = get_logger(__name__)

CUSTOM_EVENTS_KEY = "zombie_custom_events"
WELCOME_MESSAGE = "Welcome to the event simulator. Try out different situations from the game here."


def generate_event_id() -> str:
    return f"custom_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


@dataclass
class EventOutcome:
    """Character after an event and the log line describing it."""

    character: Character
    event: GameEvent
    log_entry: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character": self.character.to_dict(),
            "event": self.event.to_dict(),
            "log_entry": self.log_entry,
        }


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


class EventManager:
    """Lists, edits and triggers game events."""

    def __init__(
        self,
        save_store: SaveStore,
        notifier: HealthNotifier,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.save_store = save_store
        self.store = save_store.store
        self.notifier = notifier
        self.rng = rng or random.Random()
        self.clock = clock

    # Custom event storage

    def _read_custom_events(self) -> List[GameEvent]:
        try:
            raw = self.store.get(CUSTOM_EVENTS_KEY)
            if raw is None:
                return []
            entries = json.loads(raw)
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.error("Custom events are corrupt, treating as empty", error=str(e))
            return []
        if not isinstance(entries, list):
            logger.error("Custom events are not a list, treating as empty")
            return []

        events = []
        for entry in entries:
            try:
                event = GameEvent.from_dict(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error("Skipping corrupt custom event", error=str(e))
                continue
            event.is_custom = True
            events.append(event)
        return events

    def _write_custom_events(self, events: List[GameEvent]) -> None:
        self.store.set(
            CUSTOM_EVENTS_KEY,
            json.dumps([event.to_dict() for event in events], indent=2, ensure_ascii=False),
        )

    @staticmethod
    def _build_effects(health: Any, max_health: Any, items: Any) -> Result[EventEffects, AppError]:
        values = {}
        for name, value in (("health", health), ("max_health", max_health)):
            try:
                values[name] = int(value)
            except (TypeError, ValueError):
                return Failure(validation_error(f"{name} must be a whole number, got {value!r}", field=name))
        if isinstance(items, str) or not isinstance(items, (list, tuple)):
            return Failure(validation_error("items must be a list of item ids", field="items"))
        return Success(EventEffects(items=[str(item_id) for item_id in items], **values))

    @staticmethod
    def _validate_event(title: Any, event_type: str, effects: EventEffects) -> Optional[AppError]:
        if not isinstance(title, str) or not title.strip():

            return validation_error("Event title is required", field="title")
        if event_type not in {t.value for t in EventType}:
            return validation_error(f"Unknown event type: {event_type}", field="type")
        if effects.items and effects.items != [REMOVE_RANDOM_ITEM]:
            for item_id in effects.items:
                if item_id not in ITEMS:
                    return validation_error(f"Unknown item in effects: {item_id}", field="items")
        return None

    # Queries

    @with_result(error_kind=ErrorKind.STORAGE)
    def list_events(self) -> Result[List[GameEvent], AppError]:
        """Predefined events followed by custom ones."""
        return Success(copy.deepcopy(DEFAULT_EVENTS) + self._read_custom_events())

    @with_result(error_kind=ErrorKind.STORAGE)
    def get_event(self, event_id: str) -> Result[GameEvent, AppError]:
        events = self.list_events()
        if isinstance(events, Failure):
            return events
        for event in events.unwrap():
            if event.id == event_id:
                return Success(event)
        return Failure(not_found_error("Event", event_id))

    # Custom events

    @with_result(error_kind=ErrorKind.STORAGE)
    def create_custom_event(
        self,
        title: str,
        description: str = "",
        event_type: str = EventType.NEUTRAL.value,
        health: int = 0,
        max_health: int = 0,
        items: Optional[List[str]] = None,
    ) -> Result[GameEvent, AppError]:
        built = self._build_effects(health, max_health, items or [])
        if isinstance(built, Failure):
            return built
        effects = built.unwrap()
        error = self._validate_event(title, event_type, effects)
        if error is not None:
            return Failure(error)

        event = GameEvent(
            id=generate_event_id(),
            title=title.strip(),
            description=str(description),
            type=EventType(event_type),
            effects=effects,
            is_custom=True,
        )
        events = self._read_custom_events()
        events.append(event)
        self._write_custom_events(events)
        logger.info("Custom event created", event_id=event.id, title=event.title)
        return Success(event)

    @with_result(error_kind=ErrorKind.STORAGE)
    def update_custom_event(self, event_id: str, **changes: Any) -> Result[GameEvent, AppError]:
        """
        Update fields of a custom event.

        Accepted keys: ``title``, ``description``, ``event_type``, ``health``,
        ``max_health`` and ``items``. Predefined events cannot be changed.
        """
        events = self._read_custom_events()
        index = next((i for i, event in enumerate(events) if event.id == event_id), None)
        if index is None:
            if any(event.id == event_id for event in DEFAULT_EVENTS):
                return Failure(validation_error("Predefined events cannot be changed", field="event_id"))
            return Failure(not_found_error("Event", event_id))

        current = events[index]
        built = self._build_effects(
            changes.get("health", current.effects.health),
            changes.get("max_health", current.effects.max_health),
            changes.get("items", current.effects.items),
        )
        if isinstance(built, Failure):
            return built
        effects = built.unwrap()
        title = changes.get("title", current.title)
        event_type = changes.get("event_type", current.type.value)
        error = self._validate_event(title, event_type, effects)
        if error is not None:
            return Failure(error)

        updated = GameEvent(
            id=current.id,
            title=title.strip(),
            description=str(changes.get("description", current.description)),
            type=EventType(event_type),
            effects=effects,
            is_custom=True,
        )
        events[index] = updated
        self._write_custom_events(events)
        logger.info("Custom event updated", event_id=event_id)
        return Success(updated)

    @with_result(error_kind=ErrorKind.STORAGE)
    def delete_custom_event(self, event_id: str) -> Result[None, AppError]:
        events = self._read_custom_events()
        remaining = [event for event in events if event.id != event_id]
        if len(remaining) == len(events):
            if any(event.id == event_id for event in DEFAULT_EVENTS):
                return Failure(validation_error("Predefined events cannot be deleted", field="event_id"))
            return Failure(not_found_error("Event", event_id))
        self._write_custom_events(remaining)
        logger.info("Custom event deleted", event_id=event_id)
        return Success(None)

    # Triggering

    def _apply_effects(self, character: Character, event: GameEvent) -> str:
        """Apply the event in place and return the log text for its effects."""
        effects = event.effects
        notes = []

        if effects.health != 0:
            character.health.current = max(
                0, min(character.health.max, character.health.current + effects.health)
            )
            notes.append(f"Health {_signed(effects.health)}.")

        if effects.max_health != 0:
            character.health.max = max(1, character.health.max + effects.max_health)
            character.health.current = min(character.health.current, character.health.max)
            notes.append(f"Max health {_signed(effects.max_health)}.")

        if effects.removes_random_item:
            if character.inventory:
                removed = character.inventory.pop(self.rng.randrange(len(character.inventory)))
                notes.append(f"You lost {removed.name}.")
        else:
            for item_id in effects.items:
                item = create_item_copy(item_id)
                if item is None:
                    logger.warning("Event references unknown item", event_id=event.id, item_id=item_id)
                    continue
                if add_to_inventory(character, item) is not None:
                    notes.append("Your backpack is full, you cannot carry more items.")
                    break
                notes.append(f"You get {item.name}.")

        return " ".join(notes)

    def trigger_event(self, character_id: str, event_id: str) -> Result[EventOutcome, AppError]:
        """Apply an event to a character, save it and log what happened."""
        found = self.get_event(event_id)
        if isinstance(found, Failure):
            return found
        event = found.unwrap()

        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        health_before = (character.health.current, character.health.max)
        notes = self._apply_effects(character, event)
        character.touch()

        saved = self.save_store.save(character)
        if isinstance(saved, Failure):
            return saved

        if (character.health.current, character.health.max) != health_before:
            self.notifier.publish(
                HealthChange(character.id, character.health.current, character.health.max)
            )

        entry = f"[{self.clock().strftime('%H:%M:%S')}] {event.title}: {event.description}"
        if notes:
            entry = f"{entry} {notes}"
        logged = self._append_log(character_id, entry)
        if isinstance(logged, Failure):
            logger.error("Failed to write event log", character_id=character_id, error=str(logged.failure()))

        logger.info("Event triggered", character_id=character_id, event_id=event.id)
        return Success(EventOutcome(character=character, event=event, log_entry=entry))

    # Event log

    def _log_key(self, character_id: str) -> str:
        return f"{EVENT_LOG_PREFIX}{character_id}"

    def _read_log(self, character_id: str) -> Optional[List[str]]:
        try:
            raw = self.store.get(self._log_key(character_id))
            if raw is None:
                return None
            entries = json.loads(raw)
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.error("Event log is corrupt", character_id=character_id, error=str(e))
            return None
        if not isinstance(entries, list):
            logger.error("Event log is not a list", character_id=character_id)
            return None
        return [str(entry) for entry in entries]

    @with_result(error_kind=ErrorKind.STORAGE)
    def _append_log(self, character_id: str, entry: str) -> Result[List[str], AppError]:
        entries = [entry] + (self._read_log(character_id) or [])
        self.store.set(self._log_key(character_id), json.dumps(entries, ensure_ascii=False))
        return Success(entries)

    @with_result(error_kind=ErrorKind.STORAGE)
    def get_event_log(self, character_id: str) -> Result[List[str], AppError]:
        """Log entries newest first; a missing or corrupt log shows the welcome line."""
        entries = self._read_log(character_id)
        if not entries:
            return Success([WELCOME_MESSAGE])
        return Success(entries)

    @with_result(error_kind=ErrorKind.STORAGE)
    def clear_event_log(self, character_id: str) -> Result[None, AppError]:
        self.store.delete(self._log_key(character_id))
        logger.info("Event log cleared", character_id=character_id)
        return Success(None)
