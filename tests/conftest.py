"""Shared fixtures for the Wasteland Survivor test suite."""

import pytest

from wasteland.catalog.data import create_item_copy
from wasteland.character_creation.builder import CharacterBuilder
from wasteland.character_creation.models import Character, CharacterStats, HealthPool, PersonalSkill
from wasteland.core.notifications import HealthNotifier
from wasteland.persistence.kv_store import InMemoryKeyValueStore
from wasteland.persistence.save_store import SaveStore

PERSONAL_SKILL_IDS = ["medicina", "supervivencia", "mecanica", "sigilo", "observacion", "atletismo"]


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def save_store(kv_store):
    return SaveStore(kv_store)


@pytest.fixture
def notifier():
    return HealthNotifier()


@pytest.fixture
def health_events(notifier):
    """Collect every published health change."""
    received = []
    notifier.subscribe(received.append)
    return received


@pytest.fixture
def builder(save_store):
    builder = CharacterBuilder(save_store)
    builder.start()
    return builder


@pytest.fixture
def ready_builder(builder):
    """
    Builder at the inventory stage with a complete draft named Ava.

    Stats: intelligence 3, resistance 4 (health 12). Six personal skills
    spend the whole 15-point budget. Special skills: combate_cuerpo, sigilo.
    """
    builder.set_basics(name="Ava", age=31, background="Paramedic", appearance="Short hair")
    builder.advance()

    for _ in range(2):
        builder.change_stat("intelligence", 1)
    for _ in range(3):
        builder.change_stat("resistance", 1)
    builder.advance()

    for skill_id in PERSONAL_SKILL_IDS:
        builder.toggle_personal_skill(skill_id)
    for _ in range(5):
        builder.change_personal_skill_points("medicina", 1)
    for _ in range(4):
        builder.change_personal_skill_points("supervivencia", 1)
    builder.advance()

    builder.toggle_special_skill("combate_cuerpo")
    builder.toggle_special_skill("sigilo")
    builder.save()
    builder.continue_to_inventory()
    return builder


@pytest.fixture
def make_character(save_store):
    """Factory saving a character directly through the save store."""

    def factory(name="Rick", current=10, maximum=10, inventory=None, capacity=15, **kwargs):
        character = Character(
            name=name,
            stats=kwargs.pop("stats", CharacterStats(2, 2, 2, 2, 2)),
            personal_skills=kwargs.pop(
                "personal_skills", [PersonalSkill(id=skill_id, name=skill_id) for skill_id in PERSONAL_SKILL_IDS]
            ),
            special_skill_ids=kwargs.pop("special_skill_ids", ["combate_cuerpo", "sigilo"]),
            health=HealthPool(current=current, max=maximum),
            inventory=[create_item_copy(item_id) for item_id in (inventory or [])],
            inventory_capacity=capacity,
            **kwargs,
        )
        return save_store.save(character).unwrap()

    return factory
