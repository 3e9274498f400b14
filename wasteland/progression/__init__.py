"""Leveling and health tracking for saved characters."""

from .health import HealthTracker, clamp_health
from .level_up import LevelUpWizard, ProgressionEngine, available_new_skills, improvable_skills
from .models import LevelBenefit, LevelUpOutcome, LevelUpRequest

__all__ = [
    "HealthTracker",
    "clamp_health",
    "LevelUpWizard",
    "ProgressionEngine",
    "available_new_skills",
    "improvable_skills",
    "LevelBenefit",
    "LevelUpOutcome",
    "LevelUpRequest",
]
