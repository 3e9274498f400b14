"""Health tracking for saved characters."""

from typing import Callable, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..character_creation.models import Character
from ..core.notifications import HealthChange, HealthNotifier
from ..core.result_pattern import AppError, validation_error
from ..persistence.save_store import SaveStore

logger = get_logger(__name__)

MIN_MAX_HEALTH = 1


def clamp_health(character: Character) -> None:
    """Keep ``0 <= current <= max`` with ``max >= 1``."""
    character.health.max = max(MIN_MAX_HEALTH, character.health.max)
    character.health.current = max(0, min(character.health.current, character.health.max))


class HealthTracker:
    """Damage, healing and max-health changes, each saved and published."""

    def __init__(self, save_store: SaveStore, notifier: HealthNotifier) -> None:
        self.save_store = save_store
        self.notifier = notifier

    def _update(
        self, character_id: str, change: Callable[[Character], Optional[AppError]], action: str
    ) -> Result[Character, AppError]:
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        error = change(character)
        if error is not None:
            return Failure(error)
        clamp_health(character)
        character.touch()

        saved = self.save_store.save(character)
        if isinstance(saved, Failure):
            return saved

        self.notifier.publish(HealthChange(character.id, character.health.current, character.health.max))
        logger.info(
            "Health changed",
            character_id=character.id,
            action=action,
            current=character.health.current,
            max=character.health.max,
        )
        return Success(character)

    def apply_damage(self, character_id: str, amount: int) -> Result[Character, AppError]:
        """Reduce current health, never below zero."""
        if amount < 1:
            return Failure(validation_error("Damage must be at least 1", field="amount"))

        def change(character: Character) -> Optional[AppError]:
            character.health.current = max(0, character.health.current - amount)
            return None

        return self._update(character_id, change, "damage")

    def heal(self, character_id: str, amount: int) -> Result[Character, AppError]:
        """Restore current health up to the maximum; refused at full health."""
        if amount < 1:
            return Failure(validation_error("Healing must be at least 1", field="amount"))

        def change(character: Character) -> Optional[AppError]:
            if character.health.current >= character.health.max:
                return validation_error("Health is already full", field="amount")
            character.health.current = min(character.health.max, character.health.current + amount)
            return None

        return self._update(character_id, change, "heal")

    def set_max_health(self, character_id: str, value: int) -> Result[Character, AppError]:
        """Set the maximum, clamping current health to it."""
        if value < MIN_MAX_HEALTH:
            return Failure(validation_error(f"Max health must be at least {MIN_MAX_HEALTH}", field="value"))

        def change(character: Character) -> Optional[AppError]:
            character.health.max = value
            return None

        return self._update(character_id, change, "set_max")

    def adjust_max_health(self, character_id: str, delta: int) -> Result[Character, AppError]:
        """Raise or lower the maximum by ``delta``; it never drops below 1."""
        if delta == 0:
            return Failure(validation_error("Max health change cannot be zero", field="delta"))

        def change(character: Character) -> Optional[AppError]:
            character.health.max = max(MIN_MAX_HEALTH, character.health.max + delta)
            return None

        return self._update(character_id, change, "adjust_max")
