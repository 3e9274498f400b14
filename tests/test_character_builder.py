"""Tests for the character creation flow."""

import json

from returns.result import Failure

from wasteland.character_creation.builder import CharacterBuilder
from wasteland.character_creation.models import BuildStage, CharacterStats, PersonalSkill
from wasteland.core.error_handling import StorageError
from wasteland.core.result_pattern import ErrorKind
from wasteland.persistence.kv_store import InMemoryKeyValueStore
from wasteland.persistence.save_store import DRAFT_KEY, SaveStore


class TestDraftEditing:
    """Test draft mutations and the derived values they refresh."""

    def test_start_creates_default_draft(self, builder, kv_store):
        draft = builder.get_state().unwrap()

        assert draft.stage == BuildStage.BASICS
        assert draft.points_left == 5
        assert draft.health == 10
        assert kv_store.get(DRAFT_KEY) is not None

    def test_set_basics(self, builder):
        draft = builder.set_basics(name="  Ava ", age=40, background="Nurse").unwrap()

        assert draft.name == "Ava"
        assert draft.age == 40
        assert draft.background == "Nurse"

    def test_invalid_age_rejected(self, builder):
        result = builder.set_basics(age=0)
        assert isinstance(result, Failure)
        assert builder.get_state().unwrap().age == 25

    def test_change_stat_updates_derived_values(self, builder):
        builder.change_stat("resistance", 1)
        draft = builder.change_stat("resistance", 1).unwrap()
        draft = builder.change_stat("resistance", 1).unwrap()

        assert draft.stats.resistance == 4
        assert draft.total_stat_points == 8
        assert draft.points_left == 2
        assert draft.health == 12

    def test_rejected_stat_change_leaves_draft(self, builder):
        before = builder.get_state().unwrap()
        result = builder.change_stat("strength", -1)

        assert isinstance(result, Failure)
        assert builder.get_state().unwrap() == before

    def test_every_mutation_is_persisted(self, builder, kv_store):
        builder.change_stat("charisma", 1)
        stored = json.loads(kv_store.get(DRAFT_KEY))
        assert stored["stats"]["charisma"] == 2

    def test_personal_skill_selection_costs_one_point(self, builder):
        draft = builder.toggle_personal_skill("medicina").unwrap()

        assert draft.selected_personal_skill_ids == ["medicina"]
        assert draft.personal_skill_points_left == 4

    def test_deselect_gives_back_held_points(self, builder):
        for _ in range(2):
            builder.change_stat("intelligence", 1)
        builder.toggle_personal_skill("medicina")
        builder.change_personal_skill_points("medicina", 1)
        builder.change_personal_skill_points("medicina", 1)
        assert builder.get_state().unwrap().personal_skill_points_left == 12

        draft = builder.toggle_personal_skill("medicina").unwrap()
        assert draft.personal_skills == []
        assert draft.personal_skill_points_left == 15

    def test_seventh_personal_skill_rejected(self, builder):
        for _ in range(2):
            builder.change_stat("intelligence", 1)
        for skill_id in ["medicina", "supervivencia", "mecanica", "tecnologia", "persuasion", "sigilo"]:
            builder.toggle_personal_skill(skill_id)

        result = builder.toggle_personal_skill("empatia")
        assert isinstance(result, Failure)
        assert len(builder.get_state().unwrap().personal_skills) == 6

    def test_selection_refused_without_points(self, builder):
        for skill_id in ["medicina", "supervivencia", "mecanica", "tecnologia", "persuasion"]:
            builder.toggle_personal_skill(skill_id)

        result = builder.toggle_personal_skill("sigilo")
        assert isinstance(result, Failure)
        assert "points" in result.failure().message

    def test_unknown_personal_skill(self, builder):
        result = builder.toggle_personal_skill("telepathy")
        assert result.failure().kind == ErrorKind.NOT_FOUND

    def test_special_skills_limited_to_two(self, builder):
        builder.toggle_special_skill("combate_cuerpo")
        builder.toggle_special_skill("sigilo")

        result = builder.toggle_special_skill("cocina")
        assert isinstance(result, Failure)
        assert builder.get_state().unwrap().special_skill_ids == ["combate_cuerpo", "sigilo"]

    def test_leveling_only_special_skill_not_offered(self, builder):
        result = builder.toggle_special_skill("medico_campo")
        assert isinstance(result, Failure)


class TestStageGates:
    """Test the gates between creation stages."""

    def test_basics_to_stats_is_unconditional(self, builder):
        assert builder.advance().unwrap().stage == BuildStage.STATS

    def test_stats_gate_requires_exactly_ten(self, builder):
        builder.advance()
        for _ in range(4):
            builder.change_stat("strength", 1)

        result = builder.advance()
        assert isinstance(result, Failure)
        assert builder.get_state().unwrap().stage == BuildStage.STATS

        builder.change_stat("agility", 1)
        assert builder.advance().unwrap().stage == BuildStage.PERSONAL_SKILLS

    def test_personal_skill_gate_requires_all_points_spent(self, builder):
        builder.advance()
        for _ in range(2):
            builder.change_stat("intelligence", 1)
        for _ in range(3):
            builder.change_stat("strength", 1)
        builder.advance()

        for skill_id in ["medicina", "supervivencia", "mecanica", "tecnologia", "persuasion", "sigilo"]:
            builder.toggle_personal_skill(skill_id)
        assert builder.get_state().unwrap().personal_skill_points_left == 9
        assert isinstance(builder.advance(), Failure)

        for _ in range(9):
            builder.change_personal_skill_points("medicina", 1)
        assert builder.get_state().unwrap().personal_skill_points_left == 0
        assert builder.advance().unwrap().stage == BuildStage.SPECIAL_SKILLS

    def test_lowering_intelligence_blocks_overspent_skills(self, ready_builder):
        ready_builder.draft.stage = BuildStage.SPECIAL_SKILLS
        ready_builder.go_to(BuildStage.STATS)
        ready_builder.change_stat("intelligence", -1)
        ready_builder.change_stat("strength", 1)
        assert ready_builder.advance().unwrap().stage == BuildStage.PERSONAL_SKILLS

        draft = ready_builder.get_state().unwrap()
        assert draft.personal_skill_points_left == 0

        result = ready_builder.advance()
        assert isinstance(result, Failure)
        assert "exceed" in result.failure().message
        assert ready_builder.get_state().unwrap().stage == BuildStage.PERSONAL_SKILLS

        for _ in range(5):
            ready_builder.change_personal_skill_points("medicina", -1)
        assert ready_builder.advance().unwrap().stage == BuildStage.SPECIAL_SKILLS

    def test_finalize_rejects_overspent_skills(self, ready_builder):
        ready_builder.draft.stats.intelligence = 2
        ready_builder.draft.stats.strength += 1

        result = ready_builder.finalize()

        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.VALIDATION
        assert "exceed the budget by 5" in result.failure().message


    def test_save_requires_two_special_skills(self, ready_builder):
        ready_builder.draft.stage = BuildStage.SPECIAL_SKILLS
        ready_builder.toggle_special_skill("sigilo")

        result = ready_builder.save()
        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.VALIDATION
        assert ready_builder.get_state().unwrap().stage == BuildStage.SPECIAL_SKILLS

    def test_save_requires_name(self, ready_builder):
        ready_builder.draft.stage = BuildStage.SPECIAL_SKILLS
        ready_builder.set_basics(name="")

        result = ready_builder.save()
        assert isinstance(result, Failure)
        assert result.failure().details["field"] == "name"

    def test_go_back_within_editable_stages(self, builder):
        builder.advance()
        assert builder.go_back().unwrap().stage == BuildStage.BASICS
        assert isinstance(builder.go_back(), Failure)

    def test_go_to_earlier_stage(self, ready_builder):
        ready_builder.draft.stage = BuildStage.SPECIAL_SKILLS
        assert ready_builder.go_to(BuildStage.BASICS).unwrap().stage == BuildStage.BASICS
        assert isinstance(ready_builder.go_to(BuildStage.SPECIAL_SKILLS), Failure)

    def test_no_edits_after_save(self, ready_builder):
        result = ready_builder.change_stat("strength", -1)
        assert isinstance(result, Failure)
        assert isinstance(ready_builder.go_back(), Failure)

    def test_ready_builder_reaches_inventory(self, ready_builder):
        draft = ready_builder.get_state().unwrap()
        assert draft.stage == BuildStage.INVENTORY
        assert draft.health == 12


class TestStartingInventory:
    """Test the two-item starting loadout."""

    def test_third_item_is_rejected_without_change(self, ready_builder):
        ready_builder.toggle_inventory_item("pistola")
        ready_builder.toggle_inventory_item("botiquin")

        result = ready_builder.toggle_inventory_item("linterna")
        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.CAPACITY
        assert ready_builder.get_state().unwrap().inventory_draft_ids == ["pistola", "botiquin"]

    def test_removing_item_allows_another(self, ready_builder):
        ready_builder.toggle_inventory_item("pistola")
        ready_builder.toggle_inventory_item("botiquin")
        ready_builder.toggle_inventory_item("pistola")

        draft = ready_builder.toggle_inventory_item("linterna").unwrap()
        assert draft.inventory_draft_ids == ["botiquin", "linterna"]

    def test_unknown_item(self, ready_builder):
        assert ready_builder.toggle_inventory_item("laser").failure().kind == ErrorKind.NOT_FOUND

    def test_items_only_in_inventory_stage(self, builder):
        assert isinstance(builder.toggle_inventory_item("pistola"), Failure)


class TestFinalize:
    """Test turning a draft into a saved character."""

    def test_finalize_round_trip(self, ready_builder, save_store, kv_store):
        ready_builder.toggle_inventory_item("botiquin")

        character = ready_builder.finalize().unwrap()

        assert character.id
        assert character.name == "Ava"
        assert character.level == 1
        assert len(character.inventory) == 1
        assert character.inventory[0].id == "botiquin"
        assert character.health.current == character.health.max == 12
        assert character.inventory_capacity == 15
        assert character.special_skill_ids == ["combate_cuerpo", "sigilo"]
        assert save_store.load(character.id).unwrap() == character
        assert kv_store.get(DRAFT_KEY) is None
        assert isinstance(ready_builder.get_state(), Failure)

    def test_finalize_generates_unique_ids(self, save_store):
        ids = set()
        for name in ["Ava", "Ben"]:
            builder = CharacterBuilder(save_store)
            builder.start()
            builder.set_basics(name=name)
            draft = builder.draft
            draft.stats = CharacterStats(strength=3, agility=1, intelligence=2, resistance=2, charisma=2)
            draft.personal_skills = [
                PersonalSkill(id=skill_id, name=skill_id, points=1)
                for skill_id in ["medicina", "supervivencia", "mecanica", "tecnologia", "persuasion", "sigilo"]
            ]
            draft.personal_skills[0].points = 5
            draft.special_skill_ids = ["cocina", "rastreo"]
            draft.stage = BuildStage.INVENTORY
            ids.add(builder.finalize().unwrap().id)
        assert len(ids) == 2

    def test_finalize_drops_unknown_items(self, ready_builder):
        ready_builder.draft.inventory_draft_ids = ["radio", "jetpack"]
        character = ready_builder.finalize().unwrap()
        assert [item.id for item in character.inventory] == ["radio"]

    def test_finalize_uses_configured_capacity(self, save_store, ready_builder):
        ready_builder.inventory_capacity = 20
        assert ready_builder.finalize().unwrap().inventory_capacity == 20

    def test_finalize_before_inventory_stage_rejected(self, builder):
        assert isinstance(builder.finalize(), Failure)


class TestDraftLifecycle:
    """Test resume, reset and storage failures."""

    def test_resume_restores_stored_draft(self, builder, save_store):
        builder.set_basics(name="Ava")
        builder.advance()

        resumed = CharacterBuilder(save_store)
        draft = resumed.resume().unwrap()
        assert draft.name == "Ava"
        assert draft.stage == BuildStage.STATS

    def test_resume_without_draft_starts_fresh(self, save_store):
        draft = CharacterBuilder(save_store).resume().unwrap()
        assert draft.stage == BuildStage.BASICS

    def test_corrupt_draft_is_ignored(self, kv_store, save_store):
        kv_store.set(DRAFT_KEY, "{not json")
        draft = CharacterBuilder(save_store).resume().unwrap()
        assert draft.name == ""

    def test_reset(self, builder, kv_store):
        builder.set_basics(name="Ava")
        draft = builder.reset().unwrap()
        assert draft.name == ""
        assert json.loads(kv_store.get(DRAFT_KEY))["name"] == ""

    def test_storage_failure_keeps_previous_draft(self, mocker):
        store = InMemoryKeyValueStore()
        builder = CharacterBuilder(SaveStore(store))
        builder.start()
        mocker.patch.object(store, "set", side_effect=StorageError("disk full", operation="set"))

        result = builder.change_stat("strength", 1)
        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.STORAGE
        assert builder.get_state().unwrap().stats.strength == 1

    def test_state_without_draft(self, save_store):
        result = CharacterBuilder(save_store).get_state()
        assert result.failure().kind == ErrorKind.NOT_FOUND
