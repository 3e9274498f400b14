"""Tests for character save slots, drafts, migration and snapshots."""

import json
from datetime import datetime, timezone

import pytest
from returns.result import Failure, Success

from wasteland.character_creation.models import Character, DraftCharacter
from wasteland.core.error_handling import StorageError
from wasteland.core.result_pattern import ErrorKind
from wasteland.persistence.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from wasteland.persistence.save_store import (
    DRAFT_KEY,
    EVENT_LOG_PREFIX,
    INDEX_KEY,
    LEGACY_GAME_STATE_KEY,
    SaveStore,
    generate_character_id,
    record_key,
)

UNDECODABLE = b"\xff\xfe\x00garbage"


class FailingIndexStore(InMemoryKeyValueStore):
    """Store whose index writes always fail."""

    def set(self, key, value):
        if key == INDEX_KEY:
            raise StorageError("index unavailable", operation="set", key=key)
        super().set(key, value)


LEGACY_RECORD = {
    "character": {
        "id": "legacy",
        "name": "Old Timer",
        "age": 60,
        "stats": {"fuerza": 3, "agilidad": 2, "inteligencia": 2, "resistencia": 2, "carisma": 1},
        "personalSkills": [{"id": "medicina", "name": "Medicina", "points": 5}],
        "specialSkills": ["combate_cuerpo", "cocina"],
        "health": {"current": 7, "max": 10},
        "inventory": [],
        "createdAt": "2024-01-01T00:00:00.000Z",
        "lastUpdated": "2024-01-02T00:00:00.000Z",
    },
    "gameVersion": "0.9.0",
    "saveDate": "2024-01-02T00:00:00.000Z",
}


class TestSaveSlots:
    """Test saving, loading and deleting characters."""

    def test_generated_id_format(self):
        millis, suffix = generate_character_id().split("_")
        assert millis.isdigit()
        assert len(suffix) == 8

    def test_save_assigns_id_and_indexes(self, save_store, kv_store):
        character = save_store.save(Character(name="Ava")).unwrap()

        assert character.id
        assert json.loads(kv_store.get(INDEX_KEY)) == [character.id]
        record = json.loads(kv_store.get(record_key(character.id)))
        assert record["character"]["name"] == "Ava"
        assert record["gameVersion"] == "1.0.0"
        assert "saveDate" in record

    def test_record_uses_camel_case_layout(self, make_character, kv_store):
        character = make_character(inventory=["botiquin"])
        record = json.loads(kv_store.get(record_key(character.id)))["character"]

        for key in ["imageData", "personalSkills", "specialSkillIds", "inventoryCapacity", "createdAt"]:
            assert key in record
        assert record["inventory"][0]["maxStack"] == 3
        assert record["inventory"][0]["healthRestore"] == 3

    def test_resave_does_not_duplicate_index(self, save_store, kv_store):
        character = save_store.save(Character(name="Ava")).unwrap()
        character.level = 2
        save_store.save(character)

        assert json.loads(kv_store.get(INDEX_KEY)) == [character.id]
        assert save_store.load(character.id).unwrap().level == 2

    def test_load_round_trip(self, make_character, save_store):
        character = make_character(inventory=["pistola", "comida"])
        assert save_store.load(character.id).unwrap() == character

    def test_load_missing(self, save_store):
        result = save_store.load("nope")
        assert result.failure().kind == ErrorKind.NOT_FOUND

    def test_load_corrupt_record(self, save_store, kv_store):
        kv_store.set(record_key("broken"), "{not json")
        result = save_store.load("broken")
        assert result.failure().kind == ErrorKind.NOT_FOUND
        assert result.failure().details["corrupt"] is True

    def test_delete_is_idempotent(self, make_character, save_store, kv_store):
        character = make_character()
        kv_store.set(f"{EVENT_LOG_PREFIX}{character.id}", "[]")

        assert save_store.delete(character.id) == Success(None)
        assert save_store.delete(character.id) == Success(None)
        assert kv_store.get(record_key(character.id)) is None
        assert kv_store.get(f"{EVENT_LOG_PREFIX}{character.id}") is None
        assert save_store.character_ids() == []

    def test_index_failure_rolls_back_record(self):
        store = FailingIndexStore()
        saves = SaveStore(store)
        character = Character(name="Ava")

        result = saves.save(character)

        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.STORAGE
        assert character.id is None
        assert store.list_keys() == []

    def test_record_failure_is_storage_error(self, mocker, save_store, kv_store):
        mocker.patch.object(kv_store, "set", side_effect=StorageError("disk full", operation="set"))
        result = save_store.save(Character(name="Ava"))
        assert result.failure().kind == ErrorKind.STORAGE


class TestSummaries:
    """Test the character list."""

    def test_sorted_by_last_updated(self, make_character, save_store):
        older = make_character(name="Older", last_updated=datetime(2025, 1, 1, tzinfo=timezone.utc))
        newer = make_character(name="Newer", last_updated=datetime(2025, 6, 1, tzinfo=timezone.utc))

        summaries = save_store.list_summaries().unwrap()
        assert [s.id for s in summaries] == [newer.id, older.id]

    def test_summary_fields(self, make_character, save_store):
        make_character(name="Ava", current=4, maximum=12)
        summary = save_store.list_summaries().unwrap()[0].to_dict()

        assert summary["name"] == "Ava"
        assert summary["level"] == 1
        assert summary["health"] == {"current": 4, "max": 12}

    def test_corrupt_slot_skipped(self, make_character, save_store, kv_store):
        good = make_character()
        kv_store.set(record_key("broken"), "{not json")
        kv_store.set(INDEX_KEY, json.dumps([good.id, "broken", "missing"]))

        summaries = save_store.list_summaries().unwrap()
        assert [s.id for s in summaries] == [good.id]

    def test_empty_store(self, save_store):
        assert save_store.list_summaries() == Success([])


class TestUndecodableRecords:
    """Test file-backed values whose bytes are not valid UTF-8."""

    @pytest.fixture
    def file_saves(self, tmp_path):
        return SaveStore(JsonFileKeyValueStore(tmp_path))

    @pytest.fixture
    def broken_slot(self, tmp_path, file_saves):
        """Save two characters and make the second record undecodable."""
        good = file_saves.save(Character(name="A")).unwrap()
        bad = file_saves.save(Character(name="B")).unwrap()
        (tmp_path / f"{record_key(bad.id)}.json").write_bytes(UNDECODABLE)
        return good, bad

    def test_listing_skips_undecodable_slot(self, file_saves, broken_slot):
        good, _ = broken_slot
        assert [s.id for s in file_saves.list_summaries().unwrap()] == [good.id]

    def test_load_reports_corrupt(self, file_saves, broken_slot):
        _, bad = broken_slot
        result = file_saves.load(bad.id)

        assert result.failure().kind == ErrorKind.NOT_FOUND
        assert result.failure().details["corrupt"] is True

    def test_export_reports_corrupt(self, file_saves, broken_slot):
        _, bad = broken_slot
        assert file_saves.export_snapshot(bad.id).failure().kind == ErrorKind.NOT_FOUND

    def test_legacy_left_in_place(self, tmp_path, file_saves):
        legacy_path = tmp_path / f"{LEGACY_GAME_STATE_KEY}.json"
        legacy_path.write_bytes(UNDECODABLE)

        assert file_saves.migrate_legacy() == Success(None)
        assert legacy_path.read_bytes() == UNDECODABLE

    def test_draft_treated_as_absent(self, tmp_path, file_saves):
        (tmp_path / f"{DRAFT_KEY}.json").write_bytes(UNDECODABLE)
        assert file_saves.load_draft() == Success(None)

    def test_index_treated_as_empty(self, tmp_path, file_saves):
        (tmp_path / f"{INDEX_KEY}.json").write_bytes(UNDECODABLE)
        assert file_saves.list_summaries() == Success([])


class TestLegacyMigration:
    """Test moving the legacy single-slot save into the slot model."""

    def test_legacy_save_migrated(self, kv_store, save_store):
        kv_store.set(LEGACY_GAME_STATE_KEY, json.dumps(LEGACY_RECORD))

        character_id = save_store.migrate_legacy().unwrap()

        assert character_id == "legacy"
        assert kv_store.get(LEGACY_GAME_STATE_KEY) is None
        character = save_store.load(character_id).unwrap()
        assert character.level == 1
        assert character.stats.strength == 3
        assert character.stats.charisma == 1
        assert character.special_skill_ids == ["combate_cuerpo", "cocina"]
        assert character.health.current == 7
        assert character.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_nothing_to_migrate(self, save_store):
        assert save_store.migrate_legacy() == Success(None)

    def test_draft_only_left_untouched(self, kv_store, save_store):
        draft_json = json.dumps(DraftCharacter(name="Half done").to_dict())
        kv_store.set(DRAFT_KEY, draft_json)

        assert save_store.migrate_legacy() == Success(None)
        assert kv_store.get(DRAFT_KEY) == draft_json
        assert save_store.character_ids() == []

    def test_corrupt_legacy_left_in_place(self, kv_store, save_store):
        kv_store.set(LEGACY_GAME_STATE_KEY, "{broken")

        assert save_store.migrate_legacy() == Success(None)
        assert kv_store.get(LEGACY_GAME_STATE_KEY) == "{broken"

    def test_legacy_without_character_left_in_place(self, kv_store, save_store):
        kv_store.set(LEGACY_GAME_STATE_KEY, json.dumps({"gameVersion": "0.9.0"}))

        assert save_store.migrate_legacy() == Success(None)
        assert kv_store.get(LEGACY_GAME_STATE_KEY) is not None


class TestDraftSlot:
    """Test the single draft slot."""

    def test_draft_round_trip(self, save_store):
        draft = DraftCharacter(name="Ava", age=31)
        save_store.save_draft(draft)
        assert save_store.load_draft().unwrap() == draft

    def test_missing_draft(self, save_store):
        assert save_store.load_draft() == Success(None)

    def test_clear_draft(self, save_store, kv_store):
        save_store.save_draft(DraftCharacter())
        save_store.clear_draft()
        assert kv_store.get(DRAFT_KEY) is None


class TestSnapshots:
    """Test exporting and importing save records."""

    def test_export_is_byte_identical(self, make_character, save_store, kv_store):
        character = make_character(name="Ava Smith")
        snapshot = save_store.export_snapshot(character.id).unwrap()

        assert snapshot.content == kv_store.get(record_key(character.id))
        assert snapshot.filename == "Ava_Smith_character.json"

    def test_export_missing(self, save_store):
        assert save_store.export_snapshot("nope").failure().kind == ErrorKind.NOT_FOUND

    def test_import_restores_deleted_character(self, make_character, save_store):
        character = make_character(inventory=["radio"])
        content = save_store.export_snapshot(character.id).unwrap().content
        save_store.delete(character.id)

        imported = save_store.import_snapshot(content).unwrap()

        assert imported.id == character.id
        assert save_store.character_ids() == [character.id]
        assert save_store.load(character.id).unwrap() == character

    @pytest.mark.parametrize("content", ["not json", json.dumps({"gameVersion": "1.0.0"}), "[]"])
    def test_import_invalid(self, save_store, content):
        result = save_store.import_snapshot(content)
        assert result.failure().kind == ErrorKind.VALIDATION
        assert save_store.character_ids() == []

    @pytest.mark.parametrize(
        "health", [{"current": 15, "max": 10}, {"current": -1, "max": 10}, {"current": 0, "max": 0}]
    )
    def test_import_out_of_range_health_rejected(self, make_character, save_store, health):
        character = make_character()
        record = json.loads(save_store.export_snapshot(character.id).unwrap().content)
        record["character"]["health"] = health
        save_store.delete(character.id)

        result = save_store.import_snapshot(json.dumps(record))

        assert result.failure().kind == ErrorKind.VALIDATION
        assert save_store.character_ids() == []

    def test_import_overfull_stack_rejected(self, make_character, save_store):
        character = make_character(inventory=["botiquin"])
        record = json.loads(save_store.export_snapshot(character.id).unwrap().content)
        record["character"]["inventory"][0]["quantity"] = 9
        save_store.delete(character.id)

        assert save_store.import_snapshot(json.dumps(record)).failure().kind == ErrorKind.VALIDATION
