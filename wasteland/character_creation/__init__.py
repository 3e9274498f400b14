"""Character creation: draft models, derived stats and the build flow."""

from .builder import CharacterBuilder
from .derived_stats import (
    personal_skill_balance,
    personal_skill_budget,
    personal_skill_points_left,
    refresh_derived_stats,
    starting_health,
)
from .models import (
    BuildStage,
    Character,
    CharacterStats,
    CharacterSummary,
    CustomSkill,
    DraftCharacter,
    GameState,
    HealthPool,
    ImprovedSkill,
    PersonalSkill,
)
from .validators import CharacterValidator

__all__ = [
    "CharacterBuilder",
    "personal_skill_balance",
    "personal_skill_budget",
    "personal_skill_points_left",
    "refresh_derived_stats",
    "starting_health",
    "BuildStage",
    "Character",
    "CharacterStats",
    "CharacterSummary",
    "CustomSkill",
    "DraftCharacter",
    "GameState",
    "HealthPool",
    "ImprovedSkill",
    "PersonalSkill",
    "CharacterValidator",
]
