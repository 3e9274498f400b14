"""
Character creation flow.

The builder walks a draft through the ordered stages
``BASICS -> STATS -> PERSONAL_SKILLS -> SPECIAL_SKILLS -> (save) ->
HEALTH_REVIEW -> INVENTORY -> COMPLETE``. Each forward move is gated on the
draft; a failed gate leaves the draft untouched. Every accepted change is
written to the store's draft slot before it becomes the active draft.
"""

import copy
from typing import TYPE_CHECKING, Callable, Optional

from returns.result import Failure, Result, Success

from config.logging_config import get_logger

from ..catalog.data import CREATION_SPECIAL_SKILL_IDS, ITEMS, PERSONAL_SKILLS, create_item_copy
from ..core.result_pattern import AppError, capacity_error, not_found_error, validation_error
from .derived_stats import (
    MAX_STARTING_ITEMS,
    MAX_TOTAL_STAT_POINTS,
    REQUIRED_PERSONAL_SKILLS,
    REQUIRED_SPECIAL_SKILLS,
    check_skill_point_change,
    check_stat_change,
    personal_skill_balance,
    refresh_derived_stats,
)
from .models import BuildStage, Character, DraftCharacter, HealthPool, PersonalSkill
from .validators import CharacterValidator

if TYPE_CHECKING:
    from ..persistence.save_store import SaveStore

logger = get_logger(__name__)

STAGE_ORDER = [
    BuildStage.BASICS,
    BuildStage.STATS,
    BuildStage.PERSONAL_SKILLS,
    BuildStage.SPECIAL_SKILLS,
    BuildStage.HEALTH_REVIEW,
    BuildStage.INVENTORY,
    BuildStage.COMPLETE,
]

# Stages where the draft may still be edited and navigated freely backwards
EDITABLE_STAGES = STAGE_ORDER[:4]


class CharacterBuilder:
    """Drives a single draft character through the creation stages."""

    def __init__(self, save_store: "SaveStore", inventory_capacity: int = 15) -> None:
        self.save_store = save_store
        self.inventory_capacity = inventory_capacity
        self.draft: Optional[DraftCharacter] = None

    # Lifecycle

    def start(self) -> Result[DraftCharacter, AppError]:
        """Begin a fresh draft, replacing any draft in progress."""
        self.draft = None
        return self._commit(refresh_derived_stats(DraftCharacter()))

    def resume(self) -> Result[DraftCharacter, AppError]:
        """Continue the stored draft, or start a new one when none exists."""
        result = self.save_store.load_draft()
        if isinstance(result, Failure):
            return result
        draft = result.unwrap()
        if draft is None:
            return self.start()
        self.draft = refresh_derived_stats(draft)
        logger.info("Resumed character draft", stage=draft.stage.value, name=draft.name)
        return Success(self.draft)

    def get_state(self) -> Result[DraftCharacter, AppError]:
        if self.draft is None:
            return Failure(not_found_error("Draft", "active"))
        return Success(self.draft)

    def reset(self) -> Result[DraftCharacter, AppError]:
        """Discard the draft and start over."""
        cleared = self.save_store.clear_draft()
        if isinstance(cleared, Failure):
            return cleared
        logger.info("Character draft reset")
        return self.start()

    # Editing

    def set_basics(
        self,
        name: Optional[str] = None,
        age: Optional[int] = None,
        background: Optional[str] = None,
        appearance: Optional[str] = None,
    ) -> Result[DraftCharacter, AppError]:
        def apply(draft: DraftCharacter) -> Optional[AppError]:
            if age is not None:
                if not CharacterValidator.MIN_AGE <= age <= CharacterValidator.MAX_AGE:
                    return validation_error(
                        f"Age must be between {CharacterValidator.MIN_AGE} and "
                        f"{CharacterValidator.MAX_AGE}",
                        field="age",
                    )
                draft.age = age
            if name is not None:
                draft.name = name.strip()
            if background is not None:
                draft.background = background
            if appearance is not None:
                draft.appearance = appearance
            return None

        return self._edit(apply)

    def set_image(self, image_data: Optional[str]) -> Result[DraftCharacter, AppError]:
        def apply(draft: DraftCharacter) -> Optional[AppError]:
            draft.image_data = image_data or None
            return None

        return self._edit(apply)

    def change_stat(self, stat: str, change: int) -> Result[DraftCharacter, AppError]:
        def apply(draft: DraftCharacter) -> Optional[AppError]:
            checked = check_stat_change(draft.stats, stat, change)
            if isinstance(checked, Failure):
                return checked.failure()
            draft.stats.set(stat, checked.unwrap())
            return None

        return self._edit(apply)

    def toggle_personal_skill(self, skill_id: str) -> Result[DraftCharacter, AppError]:
        """Select a personal skill at 1 point, or deselect it and refund its points."""

        def apply(draft: DraftCharacter) -> Optional[AppError]:
            definition = PERSONAL_SKILLS.get(skill_id)
            if definition is None:
                return not_found_error("Personal skill", skill_id)

            existing = draft.find_personal_skill(skill_id)
            if existing is not None:
                draft.personal_skills.remove(existing)
                return None

            if len(draft.personal_skills) >= REQUIRED_PERSONAL_SKILLS:
                return validation_error(
                    f"Only {REQUIRED_PERSONAL_SKILLS} personal skills can be selected",
                    field="personal_skills",
                )
            if draft.personal_skill_points_left < 1:
                return validation_error("No personal skill points left", field="personal_skills")
            draft.personal_skills.append(PersonalSkill(id=definition.id, name=definition.name, points=1))
            return None

        return self._edit(apply)

    def change_personal_skill_points(self, skill_id: str, change: int) -> Result[DraftCharacter, AppError]:
        def apply(draft: DraftCharacter) -> Optional[AppError]:
            skill = draft.find_personal_skill(skill_id)
            if skill is None:
                return not_found_error("Selected personal skill", skill_id)
            checked = check_skill_point_change(skill, change, draft.personal_skill_points_left)
            if isinstance(checked, Failure):
                return checked.failure()
            skill.points = checked.unwrap()
            return None

        return self._edit(apply)

    def toggle_special_skill(self, skill_id: str) -> Result[DraftCharacter, AppError]:
        def apply(draft: DraftCharacter) -> Optional[AppError]:
            if skill_id not in CREATION_SPECIAL_SKILL_IDS:
                return validation_error(
                    f"Special skill not available at creation: {skill_id}", field="special_skills"
                )
            if skill_id in draft.special_skill_ids:
                draft.special_skill_ids.remove(skill_id)
                return None
            if len(draft.special_skill_ids) >= REQUIRED_SPECIAL_SKILLS:
                return validation_error(
                    f"Only {REQUIRED_SPECIAL_SKILLS} special skills can be selected",
                    field="special_skills",
                )
            draft.special_skill_ids.append(skill_id)
            return None

        return self._edit(apply)

    # Navigation

    def advance(self) -> Result[DraftCharacter, AppError]:
        """Move to the next stage if the current stage's gate holds."""
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        stage = state.unwrap().stage

        if stage == BuildStage.SPECIAL_SKILLS:
            return self.save()
        if stage == BuildStage.HEALTH_REVIEW:
            return self.continue_to_inventory()
        if stage in (BuildStage.INVENTORY, BuildStage.COMPLETE):
            return Failure(validation_error("Finalize the character to complete creation", field="stage"))

        error = self._check_gate(state.unwrap())
        if error is not None:
            return Failure(error)
        return self._move_to(STAGE_ORDER[STAGE_ORDER.index(stage) + 1])

    def go_back(self) -> Result[DraftCharacter, AppError]:
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        stage = state.unwrap().stage
        if stage not in EDITABLE_STAGES or stage == BuildStage.BASICS:
            return Failure(validation_error(f"Cannot go back from {stage.value}", field="stage"))
        return self._move_to(STAGE_ORDER[STAGE_ORDER.index(stage) - 1])

    def go_to(self, target: BuildStage) -> Result[DraftCharacter, AppError]:
        """Jump back to an earlier editable stage."""
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        stage = state.unwrap().stage
        if (
            stage not in EDITABLE_STAGES
            or target not in EDITABLE_STAGES
            or STAGE_ORDER.index(target) > STAGE_ORDER.index(stage)
        ):
            return Failure(
                validation_error(f"Cannot move from {stage.value} to {target.value}", field="stage")
            )
        return self._move_to(target)

    def save(self) -> Result[DraftCharacter, AppError]:
        """Confirm the special skills and name, then move to the health review."""
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        draft = state.unwrap()
        if draft.stage != BuildStage.SPECIAL_SKILLS:
            return Failure(
                validation_error("Character can only be saved from the special skills stage", field="stage")
            )
        error = self._check_gate(draft)
        if error is not None:
            return Failure(error)
        logger.info("Character draft saved", name=draft.name)
        return self._move_to(BuildStage.HEALTH_REVIEW)

    def continue_to_inventory(self) -> Result[DraftCharacter, AppError]:
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        if state.unwrap().stage != BuildStage.HEALTH_REVIEW:
            return Failure(validation_error("Review health before choosing items", field="stage"))
        return self._move_to(BuildStage.INVENTORY)

    # Starting inventory

    def toggle_inventory_item(self, item_id: str) -> Result[DraftCharacter, AppError]:
        """Add or remove a starting item; a third item is refused without changes."""
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        draft = state.unwrap()
        if draft.stage != BuildStage.INVENTORY:
            return Failure(validation_error("Starting items are chosen in the inventory stage", field="stage"))
        if item_id not in ITEMS:
            return Failure(not_found_error("Item", item_id))

        updated = copy.deepcopy(draft)
        if item_id in updated.inventory_draft_ids:
            updated.inventory_draft_ids.remove(item_id)
        elif len(updated.inventory_draft_ids) >= MAX_STARTING_ITEMS:
            return Failure(
                capacity_error(f"Only {MAX_STARTING_ITEMS} starting items can be chosen", MAX_STARTING_ITEMS)
            )
        else:
            updated.inventory_draft_ids.append(item_id)
        return self._commit(updated)

    def finalize(self) -> Result[Character, AppError]:
        """
        Turn the draft into a saved character.

        Starting item ids are resolved through the catalog and unknown ids are
        dropped. On success the draft slot is cleared.
        """
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        draft = state.unwrap()
        if draft.stage != BuildStage.INVENTORY:
            return Failure(validation_error("Character is not ready to be finalized", field="stage"))

        errors = CharacterValidator.validate_draft(draft)
        if errors:
            return Failure(validation_error("; ".join(errors), field="draft", errors=errors))

        inventory = []
        for item_id in draft.inventory_draft_ids:
            item = create_item_copy(item_id)
            if item is None:
                logger.warning("Dropping unknown starting item", item_id=item_id)
                continue
            inventory.append(item)

        character = Character(
            name=draft.name,
            age=draft.age,
            background=draft.background,
            appearance=draft.appearance,
            image_data=draft.image_data,
            level=1,
            stats=copy.deepcopy(draft.stats),
            personal_skills=copy.deepcopy(draft.personal_skills),
            special_skill_ids=list(draft.special_skill_ids),
            health=HealthPool(current=draft.health, max=draft.health),
            inventory=inventory,
            inventory_capacity=self.inventory_capacity,
        )

        saved = self.save_store.save(character)
        if isinstance(saved, Failure):
            return saved

        cleared = self.save_store.clear_draft()
        if isinstance(cleared, Failure):
            logger.error("Failed to clear draft after finalize", error=str(cleared.failure()))
        self.draft = None
        logger.info("Character created", character_id=character.id, name=character.name)
        return saved

    # Internals

    def _check_gate(self, draft: DraftCharacter) -> Optional[AppError]:
        """Return the error blocking a move out of the draft's stage, if any."""
        if draft.stage == BuildStage.STATS and draft.total_stat_points != MAX_TOTAL_STAT_POINTS:
            return validation_error(
                f"Distribute exactly {MAX_TOTAL_STAT_POINTS} stat points "
                f"({draft.total_stat_points} assigned)",
                field="stats",
            )
        if draft.stage == BuildStage.PERSONAL_SKILLS:
            if len(draft.personal_skills) != REQUIRED_PERSONAL_SKILLS:
                return validation_error(
                    f"Select exactly {REQUIRED_PERSONAL_SKILLS} personal skills", field="personal_skills"
                )
            balance = personal_skill_balance(draft.stats.intelligence, draft.personal_skills)
            if balance > 0:
                return validation_error(
                    f"Spend all personal skill points ({balance} left)", field="personal_skills"
                )
            if balance < 0:
                return validation_error(
                    f"Personal skills exceed the budget by {-balance} points", field="personal_skills"
                )
        if draft.stage == BuildStage.SPECIAL_SKILLS:
            if len(draft.special_skill_ids) != REQUIRED_SPECIAL_SKILLS:
                return validation_error(
                    f"Select exactly {REQUIRED_SPECIAL_SKILLS} special skills", field="special_skills"
                )
            if not draft.name.strip():
                return validation_error("Character name is required", field="name")
        return None

    def _edit(self, apply: Callable[[DraftCharacter], Optional[AppError]]) -> Result[DraftCharacter, AppError]:
        state = self.get_state()
        if isinstance(state, Failure):
            return state
        if state.unwrap().stage not in EDITABLE_STAGES:
            return Failure(validation_error("Draft can no longer be edited", field="stage"))

        updated = copy.deepcopy(state.unwrap())
        error = apply(updated)
        if error is not None:
            return Failure(error)
        return self._commit(refresh_derived_stats(updated))

    def _move_to(self, stage: BuildStage) -> Result[DraftCharacter, AppError]:
        updated = copy.deepcopy(self.draft)
        updated.stage = stage
        return self._commit(updated)

    def _commit(self, draft: DraftCharacter) -> Result[DraftCharacter, AppError]:
        saved = self.save_store.save_draft(draft)
        if isinstance(saved, Failure):
            logger.error("Failed to store draft", error=str(saved.failure()))
            return saved
        self.draft = draft
        return Success(draft)
