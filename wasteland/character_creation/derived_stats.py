"""
Derived values of a draft character.

All functions are pure except ``refresh_derived_stats``, which writes the
computed values back onto the draft it is given.
"""

from typing import Iterable

from returns.result import Failure, Result, Success

from ..core.result_pattern import AppError, validation_error
from .models import CharacterStats, DraftCharacter, PersonalSkill

MAX_TOTAL_STAT_POINTS = 10
MIN_STAT_VALUE = 1
MAX_STAT_VALUE = 5

REQUIRED_PERSONAL_SKILLS = 6
MIN_SKILL_POINTS = 1
MAX_SKILL_POINTS = 10
SKILL_POINTS_PER_INTELLIGENCE = 5

REQUIRED_SPECIAL_SKILLS = 2
MAX_STARTING_ITEMS = 2

BASE_HEALTH = 10
HEALTH_RESISTANCE_THRESHOLD = 2


def personal_skill_budget(intelligence: int) -> int:
    return intelligence * SKILL_POINTS_PER_INTELLIGENCE


def personal_skill_balance(intelligence: int, skills: Iterable[PersonalSkill]) -> int:
    """Budget minus points spent; negative when the budget is overspent."""
    return personal_skill_budget(intelligence) - sum(skill.points for skill in skills)


def personal_skill_points_left(intelligence: int, skills: Iterable[PersonalSkill]) -> int:
    return max(0, personal_skill_balance(intelligence, skills))


def starting_health(resistance: int) -> int:
    """Base health plus one point per resistance above the threshold."""
    return BASE_HEALTH + max(0, resistance - HEALTH_RESISTANCE_THRESHOLD)


def refresh_derived_stats(draft: DraftCharacter) -> DraftCharacter:
    """Recompute every derived field of the draft in place."""
    draft.total_stat_points = draft.stats.total()
    draft.points_left = MAX_TOTAL_STAT_POINTS - draft.total_stat_points
    draft.personal_skill_points_left = personal_skill_points_left(
        draft.stats.intelligence, draft.personal_skills
    )
    draft.health = starting_health(draft.stats.resistance)
    return draft


def check_stat_change(stats: CharacterStats, stat: str, change: int) -> Result[int, AppError]:
    """
    Validate a +1/-1 edit of a base stat.

    Returns:
        Success with the new stat value, or a validation Failure.
    """
    if stat not in CharacterStats.__dataclass_fields__:
        return Failure(validation_error(f"Unknown stat: {stat}", field="stat"))
    if change not in (1, -1):
        return Failure(validation_error("Stat changes must be +1 or -1", field="change"))

    current = stats.get(stat)
    total = stats.total()
    points_left = MAX_TOTAL_STAT_POINTS - total

    if change < 0 and current <= MIN_STAT_VALUE:
        return Failure(validation_error(f"{stat} cannot go below {MIN_STAT_VALUE}", field=stat))
    if change > 0 and current >= MAX_STAT_VALUE:
        return Failure(validation_error(f"{stat} cannot go above {MAX_STAT_VALUE}", field=stat))
    if total + change > MAX_TOTAL_STAT_POINTS:
        return Failure(
            validation_error(f"Total stat points cannot exceed {MAX_TOTAL_STAT_POINTS}", field=stat)
        )
    if points_left - change < 0:
        return Failure(validation_error("No stat points left", field=stat))
    return Success(current + change)


def check_skill_point_change(
    skill: PersonalSkill, change: int, points_left: int
) -> Result[int, AppError]:
    """Validate a +1/-1 edit of a personal skill's points."""
    if change not in (1, -1):
        return Failure(validation_error("Skill point changes must be +1 or -1", field="change"))
    new_points = skill.points + change
    if new_points < MIN_SKILL_POINTS:
        return Failure(
            validation_error(f"{skill.name} needs at least {MIN_SKILL_POINTS} point", field=skill.id)
        )
    if new_points > MAX_SKILL_POINTS:
        return Failure(
            validation_error(f"{skill.name} cannot exceed {MAX_SKILL_POINTS} points", field=skill.id)
        )
    if change > 0 and points_left <= 0:
        return Failure(validation_error("No personal skill points left", field=skill.id))
    return Success(new_points)
