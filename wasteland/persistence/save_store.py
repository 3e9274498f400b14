"""
Save slots for finalized characters.

Each character lives in its own record keyed by id, and an index record
lists every id in creation order. The store also owns the single draft
slot used by the creation flow and the migration of the legacy
single-slot save.
"""

import json
import time
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..character_creation.models import Character, CharacterSummary, DraftCharacter, GameState
from ..core.error_handling import DataIntegrityError, StorageError
from ..core.result_pattern import AppError, ErrorKind, not_found_error, validation_error, with_result
from .kv_store import KeyValueStore

logger = get_logger(__name__)

INDEX_KEY = "zombie_characters"
RECORD_PREFIX = "zombie_character_"
LEGACY_GAME_STATE_KEY = "zombieGameState"
DRAFT_KEY = "zombieCharacter"
EVENT_LOG_PREFIX = "zombie_event_log_"


def generate_character_id() -> str:
    """Return a new id of the form ``<epoch-ms>_<random hex>``."""
    return f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def record_key(character_id: str) -> str:
    return f"{RECORD_PREFIX}{character_id}"


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class Snapshot:
    """Exported save record and the file name suggested for it."""

    filename: str
    content: str

    def to_dict(self) -> dict:
        return {"filename": self.filename, "content": self.content}


class SaveStore:
    """Persist characters in independent save slots."""

    def __init__(self, store: KeyValueStore, game_version: str = "1.0.0") -> None:
        self.store = store
        self.game_version = game_version

    # Index

    def _read_index(self) -> List[str]:
        try:
            raw = self.store.get(INDEX_KEY)
            if raw is None:
                return []
            ids = json.loads(raw)
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.error("Character index is corrupt, treating as empty", error=str(e))
            return []
        if not isinstance(ids, list):
            logger.error("Character index is not a list, treating as empty")
            return []
        return [str(character_id) for character_id in ids]

    def _write_index(self, ids: List[str]) -> None:
        self.store.set(INDEX_KEY, json.dumps(ids))

    # Slots

    @with_result(error_kind=ErrorKind.STORAGE)
    def save(self, character: Character) -> Result[Character, AppError]:
        """
        Write a character to its slot, assigning an id when it has none.

        A new id is appended to the index. When the index write fails for a
        new id the record write is undone, so the index and the set of
        records stay consistent.
        """
        generated = character.id is None
        if generated:
            character.id = generate_character_id()

        ids = self._read_index()
        is_new = character.id not in ids
        state = GameState(character=character, game_version=self.game_version)
        key = record_key(character.id)

        try:
            self.store.set(key, dump_json(state.to_dict()))
        except StorageError:
            if generated:
                character.id = None
            raise

        if is_new:
            try:
                self._write_index(ids + [character.id])
            except StorageError as e:
                logger.error("Index write failed, rolling back record", character_id=character.id, error=str(e))
                self.store.delete(key)
                if generated:
                    character.id = None
                raise

        logger.info("Character saved", character_id=character.id, name=character.name, new=is_new)
        return Success(character)

    @with_result(error_kind=ErrorKind.STORAGE)
    def load(self, character_id: str) -> Result[Character, AppError]:
        """Load a character, reporting corrupt records as not found."""
        try:
            raw = self.store.get(record_key(character_id))
            if raw is None:
                return Failure(not_found_error("Character", character_id))
            state = GameState.from_dict(json.loads(raw))
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.error("Character record is corrupt", character_id=character_id, error=str(e))
            return Failure(not_found_error("Character", character_id, corrupt=True))

        character = state.character
        if character.id is None:
            character.id = character_id
        return Success(character)

    @with_result(error_kind=ErrorKind.STORAGE)
    def delete(self, character_id: str) -> Result[None, AppError]:
        """Delete a slot; deleting a missing slot succeeds."""
        self.store.delete(record_key(character_id))
        self.store.delete(f"{EVENT_LOG_PREFIX}{character_id}")
        ids = self._read_index()
        if character_id in ids:
            self._write_index([i for i in ids if i != character_id])
        logger.info("Character deleted", character_id=character_id)
        return Success(None)

    @with_result(error_kind=ErrorKind.STORAGE)
    def list_summaries(self) -> Result[List[CharacterSummary], AppError]:
        """Summaries of every loadable slot, most recently updated first."""
        summaries = []
        for character_id in self._read_index():
            result = self.load(character_id)
            if isinstance(result, Failure):
                if result.failure().kind == ErrorKind.STORAGE:
                    return result
                logger.warning("Skipping unloadable character", character_id=character_id)
                continue
            summaries.append(CharacterSummary.from_character(result.unwrap()))

        summaries.sort(key=lambda summary: summary.last_updated, reverse=True)
        return Success(summaries)

    def character_ids(self) -> List[str]:
        return self._read_index()

    # Legacy

    @with_result(error_kind=ErrorKind.STORAGE)
    def migrate_legacy(self) -> Result[Optional[str], AppError]:
        """
        Move the legacy single-slot save into the slot model.

        Returns:
            Success with the migrated character id, or None when there was
            nothing to migrate. Corrupt legacy data is left in place.
        """
        try:
            raw = self.store.get(LEGACY_GAME_STATE_KEY)
            if raw is None:
                if DRAFT_KEY in self.store.list_keys(DRAFT_KEY):
                    logger.info("In-progress draft found, leaving it for the creation flow")
                return Success(None)
            state = GameState.from_dict(json.loads(raw))
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.error("Legacy save is corrupt, leaving it in place", error=str(e))
            return Success(None)

        result = self.save(state.character)
        if isinstance(result, Failure):
            return result

        self.store.delete(LEGACY_GAME_STATE_KEY)
        character_id = result.unwrap().id
        logger.info("Legacy save migrated", character_id=character_id)
        return Success(character_id)

    # Draft

    @with_result(error_kind=ErrorKind.STORAGE)
    def save_draft(self, draft: DraftCharacter) -> Result[None, AppError]:
        self.store.set(DRAFT_KEY, dump_json(draft.to_dict()))
        return Success(None)

    @with_result(error_kind=ErrorKind.STORAGE)
    def load_draft(self) -> Result[Optional[DraftCharacter], AppError]:
        """Load the draft; a corrupt draft is treated as absent."""
        try:
            raw = self.store.get(DRAFT_KEY)
            if raw is None:
                return Success(None)
            return Success(DraftCharacter.from_dict(json.loads(raw)))
        except (json.JSONDecodeError, DataIntegrityError) as e:
            logger.warning("Draft is corrupt, ignoring it", error=str(e))
            return Success(None)

    @with_result(error_kind=ErrorKind.STORAGE)
    def clear_draft(self) -> Result[None, AppError]:
        self.store.delete(DRAFT_KEY)
        return Success(None)

    # Snapshots

    @with_result(error_kind=ErrorKind.STORAGE)
    def export_snapshot(self, character_id: str) -> Result[Snapshot, AppError]:
        """Return the stored record text unchanged plus a file name."""
        loaded = self.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        raw = self.store.get(record_key(character_id))
        if raw is None:
            return Failure(not_found_error("Character", character_id))
        filename = f"{loaded.unwrap().name.replace(' ', '_')}_character.json"
        return Success(Snapshot(filename=filename, content=raw))

    @with_result(error_kind=ErrorKind.STORAGE)
    def import_snapshot(self, content: str) -> Result[Character, AppError]:
        """Save a previously exported record, keeping its id."""
        try:
            state = GameState.from_dict(json.loads(content))
        except json.JSONDecodeError as e:
            return Failure(validation_error(f"Snapshot is not valid JSON: {e}", field="content"))
        except DataIntegrityError as e:
            return Failure(validation_error(e.message, field="content"))
        return self.save(state.character)

