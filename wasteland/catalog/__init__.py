"""Static catalog data for stats, skills and items."""

from .data import (
    CREATION_SPECIAL_SKILL_IDS,
    ITEMS,
    PERSONAL_SKILLS,
    SPECIAL_SKILLS,
    STARTING_ITEM_IDS,
    STAT_NAMES,
    STATS,
    create_item_copy,
    get_item_definition,
    get_personal_skill,
    get_special_skill,
    get_stat,
    list_creation_special_skills,
    list_starting_items,
)
from .models import RESTORATIVE_TYPES, Item, ItemDefinition, ItemType, SkillDefinition, StatDefinition

__all__ = [
    "CREATION_SPECIAL_SKILL_IDS",
    "ITEMS",
    "PERSONAL_SKILLS",
    "SPECIAL_SKILLS",
    "STARTING_ITEM_IDS",
    "STAT_NAMES",
    "STATS",
    "RESTORATIVE_TYPES",
    "Item",
    "ItemDefinition",
    "ItemType",
    "SkillDefinition",
    "StatDefinition",
    "create_item_copy",
    "get_item_definition",
    "get_personal_skill",
    "get_special_skill",
    "get_stat",
    "list_creation_special_skills",
    "list_starting_items",
]
