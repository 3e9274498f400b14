"""Health change notifications shared by the game engines."""

from dataclasses import dataclass
from typing import Callable, List

from config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HealthChange:
    """Health of one character after a change."""

    character_id: str
    current: int
    max: int

    def to_dict(self) -> dict:
        return {"character_id": self.character_id, "current": self.current, "max": self.max}


HealthListener = Callable[[HealthChange], None]


class HealthNotifier:
    """
    Fan out health changes to subscribed listeners.

    Delivery is synchronous in subscription order. Publishing is
    fire-and-forget: a listener that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._listeners: List[HealthListener] = []

    def subscribe(self, listener: HealthListener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener; calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, change: HealthChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                logger.error(
                    "Health listener failed",
                    character_id=change.character_id,
                    error=str(e),
                )

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
