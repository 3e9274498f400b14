"""Level-up data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..character_creation.models import Character


class LevelBenefit(Enum):
    """Benefits a character can choose when leveling up."""

    HEALTH = "health"
    STRENGTH = "strength"
    AGILITY = "agility"
    INTELLIGENCE = "intelligence"
    RESISTANCE = "resistance"
    CHARISMA = "charisma"
    NEW_SKILL = "new_skill"
    IMPROVE_SKILL = "improve_skill"

    @property
    def is_stat(self) -> bool:
        return self in STAT_BENEFITS

    @property
    def needs_confirmation(self) -> bool:
        return self == LevelBenefit.HEALTH or self.is_stat


STAT_BENEFITS = frozenset(
    {
        LevelBenefit.STRENGTH,
        LevelBenefit.AGILITY,
        LevelBenefit.INTELLIGENCE,
        LevelBenefit.RESISTANCE,
        LevelBenefit.CHARISMA,
    }
)

HEALTH_BENEFIT_AMOUNT = 2


@dataclass
class LevelUpRequest:
    """Everything the player chose in the level-up wizard."""

    benefit: Optional[LevelBenefit] = None
    confirmed: bool = False
    # NEW_SKILL: either a catalog skill id or a custom name and description
    skill_id: Optional[str] = None
    custom_skill_name: Optional[str] = None
    custom_skill_description: Optional[str] = None
    # IMPROVE_SKILL
    improve_skill_id: Optional[str] = None
    improvement_effect: Optional[str] = None


@dataclass
class LevelUpOutcome:
    """Character after a level-up and a short description of what changed."""

    character: Character
    benefit: LevelBenefit
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character": self.character.to_dict(),
            "benefit": self.benefit.value,
            "message": self.message,
        }
