"""Validation utilities for character creation."""

from typing import List

from ..catalog.data import CREATION_SPECIAL_SKILL_IDS, PERSONAL_SKILLS, STAT_NAMES
from .derived_stats import (
    MAX_SKILL_POINTS,
    MAX_STARTING_ITEMS,
    MAX_STAT_VALUE,
    MAX_TOTAL_STAT_POINTS,
    MIN_SKILL_POINTS,
    MIN_STAT_VALUE,
    REQUIRED_PERSONAL_SKILLS,
    REQUIRED_SPECIAL_SKILLS,
    personal_skill_balance,
)
from .models import CharacterStats, DraftCharacter


class CharacterValidator:
    """Validates a draft character against the creation rules."""

    MIN_AGE = 1
    MAX_AGE = 120

    @classmethod
    def validate_basics(cls, draft: DraftCharacter) -> List[str]:
        errors = []
        if not draft.name.strip():
            errors.append("Character name is required")
        if not cls.MIN_AGE <= draft.age <= cls.MAX_AGE:
            errors.append(f"Age must be between {cls.MIN_AGE} and {cls.MAX_AGE}, got {draft.age}")
        return errors

    @classmethod
    def validate_stats(cls, stats: CharacterStats) -> List[str]:
        """
        Validate base stats at creation time.

        Args:
            stats: CharacterStats object to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        for stat_name in STAT_NAMES:
            value = stats.get(stat_name)
            if not MIN_STAT_VALUE <= value <= MAX_STAT_VALUE:
                errors.append(
                    f"{stat_name.capitalize()} must be between "
                    f"{MIN_STAT_VALUE} and {MAX_STAT_VALUE}, got {value}"
                )
        if stats.total() != MAX_TOTAL_STAT_POINTS:
            errors.append(
                f"Stat points must total exactly {MAX_TOTAL_STAT_POINTS}, got {stats.total()}"
            )
        return errors

    @classmethod
    def validate_personal_skills(cls, draft: DraftCharacter) -> List[str]:
        errors = []
        if len(draft.personal_skills) != REQUIRED_PERSONAL_SKILLS:
            errors.append(
                f"Exactly {REQUIRED_PERSONAL_SKILLS} personal skills are required, "
                f"got {len(draft.personal_skills)}"
            )
        for skill in draft.personal_skills:
            if skill.id not in PERSONAL_SKILLS:
                errors.append(f"Unknown personal skill: {skill.id}")
            if not MIN_SKILL_POINTS <= skill.points <= MAX_SKILL_POINTS:
                errors.append(
                    f"{skill.name} must have between {MIN_SKILL_POINTS} and "
                    f"{MAX_SKILL_POINTS} points, got {skill.points}"
                )
        balance = personal_skill_balance(draft.stats.intelligence, draft.personal_skills)
        if balance > 0:
            errors.append(f"All personal skill points must be spent, {balance} left")
        elif balance < 0:
            errors.append(f"Personal skills exceed the budget by {-balance} points")
        return errors

    @classmethod
    def validate_special_skills(cls, draft: DraftCharacter) -> List[str]:
        errors = []
        if len(draft.special_skill_ids) != REQUIRED_SPECIAL_SKILLS:
            errors.append(
                f"Exactly {REQUIRED_SPECIAL_SKILLS} special skills are required, "
                f"got {len(draft.special_skill_ids)}"
            )
        for skill_id in draft.special_skill_ids:
            if skill_id not in CREATION_SPECIAL_SKILL_IDS:
                errors.append(f"Special skill not available at creation: {skill_id}")
        return errors

    @classmethod
    def validate_starting_items(cls, draft: DraftCharacter) -> List[str]:
        errors = []
        if len(draft.inventory_draft_ids) > MAX_STARTING_ITEMS:
            errors.append(
                f"At most {MAX_STARTING_ITEMS} starting items are allowed, "
                f"got {len(draft.inventory_draft_ids)}"
            )
        return errors

    @classmethod
    def validate_draft(cls, draft: DraftCharacter) -> List[str]:
        """Run every creation check; an empty list means the draft can be finalized."""
        errors = []
        errors.extend(cls.validate_basics(draft))
        errors.extend(cls.validate_stats(draft.stats))
        errors.extend(cls.validate_personal_skills(draft))
        errors.extend(cls.validate_special_skills(draft))
        errors.extend(cls.validate_starting_items(draft))
        return errors
