"""
Level-up rules.

A level-up applies exactly one benefit and increments the level by one in
the same save. Requests missing a required choice are rejected before
anything is touched.
"""

import time
import uuid
from typing import Any, Dict, List, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..catalog.data import SPECIAL_SKILLS
from ..catalog.models import SkillDefinition
from ..character_creation.derived_stats import HEALTH_RESISTANCE_THRESHOLD
from ..character_creation.models import Character, CustomSkill, ImprovedSkill
from ..core.notifications import HealthChange, HealthNotifier
from ..core.result_pattern import AppError, not_found_error, validation_error
from ..persistence.save_store import SaveStore
from .models import HEALTH_BENEFIT_AMOUNT, LevelBenefit, LevelUpOutcome, LevelUpRequest

logger = get_logger(__name__)


def generate_custom_skill_id() -> str:
    return f"custom_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def available_new_skills(character: Character) -> List[SkillDefinition]:
    """Catalog special skills the character does not own yet."""
    owned = set(character.special_skill_ids)
    return [skill for skill_id, skill in SPECIAL_SKILLS.items() if skill_id not in owned]


def improvable_skills(character: Character) -> List[Dict[str, Any]]:
    """Owned special and custom skills that have not been improved."""
    skills = []
    for skill_id in character.special_skill_ids:
        if character.is_skill_improved(skill_id):
            continue
        custom = character.find_custom_skill(skill_id)
        if custom is not None:
            skills.append(
                {"id": custom.id, "name": custom.name, "description": custom.description, "custom": True}
            )
            continue
        definition = SPECIAL_SKILLS.get(skill_id)
        if definition is not None:
            skills.append(
                {"id": definition.id, "name": definition.name, "description": definition.description, "custom": False}
            )
    return skills


def _present(text: Optional[str]) -> bool:
    return bool(text and text.strip())


class ProgressionEngine:
    """Applies level-up benefits to saved characters."""

    def __init__(self, save_store: SaveStore, notifier: HealthNotifier) -> None:
        self.save_store = save_store
        self.notifier = notifier

    def available_new_skills(self, character_id: str) -> Result[List[SkillDefinition], AppError]:
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        return Success(available_new_skills(loaded.unwrap()))

    def improvable_skills(self, character_id: str) -> Result[List[Dict[str, Any]], AppError]:
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        return Success(improvable_skills(loaded.unwrap()))

    def validate_request(self, character: Character, request: LevelUpRequest) -> Optional[AppError]:
        """Return the first reason the request cannot be applied, or None."""
        benefit = request.benefit
        if benefit is None:
            return validation_error("Choose a level-up benefit", field="benefit")

        if benefit.needs_confirmation and not request.confirmed:
            return validation_error("Confirm the level-up benefit", field="confirmed")

        if benefit == LevelBenefit.NEW_SKILL:
            if request.skill_id:
                if request.skill_id not in SPECIAL_SKILLS:
                    return not_found_error("Special skill", request.skill_id)
                if request.skill_id in character.special_skill_ids:
                    return validation_error(
                        f"Skill already owned: {request.skill_id}", field="skill_id"
                    )
                return None
            if not _present(request.custom_skill_name) and not _present(request.custom_skill_description):
                return validation_error("Choose a skill or describe a custom one", field="skill_id")
            if not _present(request.custom_skill_name):
                return validation_error("Custom skill needs a name", field="custom_skill_name")
            if not _present(request.custom_skill_description):
                return validation_error(
                    "Custom skill needs a description", field="custom_skill_description"
                )

        if benefit == LevelBenefit.IMPROVE_SKILL:
            skill_id = request.improve_skill_id
            if not skill_id:
                return validation_error("Choose a skill to improve", field="improve_skill_id")
            if skill_id not in character.special_skill_ids:
                return not_found_error("Owned skill", skill_id)
            if character.is_skill_improved(skill_id):
                return validation_error(f"Skill already improved: {skill_id}", field="improve_skill_id")
            if not _present(request.improvement_effect):
                return validation_error("Describe the improvement", field="improvement_effect")
        return None

    def _apply_benefit(self, character: Character, request: LevelUpRequest) -> str:
        benefit = request.benefit

        if benefit == LevelBenefit.HEALTH:
            character.health.max += HEALTH_BENEFIT_AMOUNT
            character.health.current += HEALTH_BENEFIT_AMOUNT
            return f"+{HEALTH_BENEFIT_AMOUNT} max health"

        if benefit.is_stat:
            stat = benefit.value
            character.stats.set(stat, character.stats.get(stat) + 1)
            message = f"+1 {stat}"
            if benefit == LevelBenefit.RESISTANCE and character.stats.resistance > HEALTH_RESISTANCE_THRESHOLD:
                character.health.max += 1
                character.health.current += 1
                message += ", +1 max health"
            return message

        if benefit == LevelBenefit.NEW_SKILL:
            if request.skill_id:
                character.special_skill_ids.append(request.skill_id)
                return f"New skill: {SPECIAL_SKILLS[request.skill_id].name}"
            custom = CustomSkill(
                id=generate_custom_skill_id(),
                name=request.custom_skill_name.strip(),
                description=request.custom_skill_description.strip(),
            )
            character.special_skill_ids.append(custom.id)
            character.custom_skills.append(custom)
            return f"New custom skill: {custom.name}"

        skill_id = request.improve_skill_id
        effect = request.improvement_effect.strip()
        custom = character.find_custom_skill(skill_id)
        if custom is not None:
            custom.improved = True
            custom.improved_effect = effect
            return f"Improved skill: {custom.name}"
        character.improved_skills.append(ImprovedSkill(skill_id=skill_id, effect=effect))
        definition = SPECIAL_SKILLS.get(skill_id)
        return f"Improved skill: {definition.name if definition else skill_id}"

    def apply_level_up(self, character_id: str, request: LevelUpRequest) -> Result[LevelUpOutcome, AppError]:
        """
        Apply one benefit and raise the level by one.

        Args:
            character_id: Saved character to level up
            request: The player's choices

        Returns:
            Success with the updated character, or a Failure with nothing saved
        """
        loaded = self.save_store.load(character_id)
        if isinstance(loaded, Failure):
            return loaded
        character = loaded.unwrap()

        error = self.validate_request(character, request)
        if error is not None:
            return Failure(error)

        health_before = (character.health.current, character.health.max)
        message = self._apply_benefit(character, request)
        character.level += 1
        character.touch()

        saved = self.save_store.save(character)
        if isinstance(saved, Failure):
            return saved

        if (character.health.current, character.health.max) != health_before:
            self.notifier.publish(
                HealthChange(character.id, character.health.current, character.health.max)
            )
        logger.info(
            "Character leveled up",
            character_id=character.id,
            level=character.level,
            benefit=request.benefit.value,
        )
        return Success(LevelUpOutcome(character=character, benefit=request.benefit, message=message))


class LevelUpWizard:
    """
    Step-by-step level-up for one character.

    Choices accumulate in a ``LevelUpRequest`` until ``confirm`` applies
    them. Changing the benefit clears the skill choices made for the
    previous one.
    """

    def __init__(self, engine: ProgressionEngine, character_id: str) -> None:
        self.engine = engine
        self.character_id = character_id
        self.request = LevelUpRequest()

    def select_benefit(self, benefit: LevelBenefit) -> LevelUpRequest:
        self.request = LevelUpRequest(benefit=benefit)
        return self.request

    def choose_skill(self, skill_id: str) -> LevelUpRequest:
        self.request.skill_id = skill_id
        self.request.custom_skill_name = None
        self.request.custom_skill_description = None
        return self.request

    def define_custom_skill(self, name: str, description: str) -> LevelUpRequest:
        self.request.skill_id = None
        self.request.custom_skill_name = name
        self.request.custom_skill_description = description
        return self.request

    def choose_improvement(self, skill_id: str, effect: str) -> LevelUpRequest:
        self.request.improve_skill_id = skill_id
        self.request.improvement_effect = effect
        return self.request

    def confirm(self) -> Result[LevelUpOutcome, AppError]:
        self.request.confirmed = True
        result = self.engine.apply_level_up(self.character_id, self.request)
        if isinstance(result, Success):
            self.request = LevelUpRequest()
        return result

    def cancel(self) -> None:
        self.request = LevelUpRequest()
