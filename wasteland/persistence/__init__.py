"""Key-value backends and the character save store."""

from .kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .save_store import (
    DRAFT_KEY,
    EVENT_LOG_PREFIX,
    INDEX_KEY,
    LEGACY_GAME_STATE_KEY,
    RECORD_PREFIX,
    SaveStore,
    Snapshot,
    generate_character_id,
    record_key,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "DRAFT_KEY",
    "EVENT_LOG_PREFIX",
    "INDEX_KEY",
    "LEGACY_GAME_STATE_KEY",
    "RECORD_PREFIX",
    "SaveStore",
    "Snapshot",
    "generate_character_id",
    "record_key",
]
