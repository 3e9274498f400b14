"""MCP tool implementations for leveling and health."""

from typing import Any, Dict, Optional

from returns.result import Failure

from config.logging_config import get_logger

from ..core.result_pattern import result_to_response
from .health import HealthTracker
from .level_up import ProgressionEngine
from .models import LevelBenefit, LevelUpRequest

logger = get_logger(__name__)

# Initialized by main.py
progression_engine: Optional[ProgressionEngine] = None
health_tracker: Optional[HealthTracker] = None

NOT_INITIALIZED = {"success": False, "message": "Progression tools not initialized"}


def initialize_progression_tools(engine: ProgressionEngine, tracker: HealthTracker) -> None:
    """
    Initialize progression tools with required dependencies.

    Args:
        engine: Level-up engine
        tracker: Health tracker
    """
    global progression_engine, health_tracker
    progression_engine = engine
    health_tracker = tracker
    logger.info("Progression MCP tools initialized")


def register_progression_tools(mcp_server) -> None:
    """
    Register leveling and health tools with the MCP server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
    """
    mcp_server.tool()(get_level_up_options)
    mcp_server.tool()(level_up)
    mcp_server.tool()(apply_damage)
    mcp_server.tool()(heal)
    mcp_server.tool()(set_max_health)
    mcp_server.tool()(adjust_max_health)
    logger.info("Progression MCP tools registered")


def _character_response(result) -> Dict[str, Any]:
    return result_to_response(result, lambda character: character.to_dict())


async def get_level_up_options(character_id: str) -> Dict[str, Any]:
    """
    List the choices available for a character's next level.

    Returns:
        Benefits, skills that can be learned and skills that can be improved
    """
    if not progression_engine:
        return NOT_INITIALIZED

    new_skills = progression_engine.available_new_skills(character_id)
    improvable = progression_engine.improvable_skills(character_id)
    if isinstance(new_skills, Failure):
        return result_to_response(new_skills)
    return {
        "success": True,
        "data": {
            "benefits": [benefit.value for benefit in LevelBenefit],
            "new_skills": [vars(skill) for skill in new_skills.unwrap()],
            "improvable_skills": improvable.value_or([]),
        },
    }


async def level_up(
    character_id: str,
    benefit: str,
    confirmed: bool = False,
    skill_id: Optional[str] = None,
    custom_skill_name: Optional[str] = None,
    custom_skill_description: Optional[str] = None,
    improve_skill_id: Optional[str] = None,
    improvement_effect: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Level up a character with one benefit.

    Args:
        character_id: Character to level up
        benefit: health, strength, agility, intelligence, resistance, charisma,
            new_skill or improve_skill
        confirmed: Required for health and stat benefits
        skill_id: Catalog special skill to learn (new_skill)
        custom_skill_name: Name of a custom skill to learn (new_skill)
        custom_skill_description: Description of the custom skill (new_skill)
        improve_skill_id: Owned skill to improve (improve_skill)
        improvement_effect: What the improvement does (improve_skill)
    """
    if not progression_engine:
        return NOT_INITIALIZED
    try:
        chosen = LevelBenefit(benefit)
    except ValueError:
        return {"success": False, "message": f"Unknown benefit: {benefit}"}

    request = LevelUpRequest(
        benefit=chosen,
        confirmed=confirmed,
        skill_id=skill_id,
        custom_skill_name=custom_skill_name,
        custom_skill_description=custom_skill_description,
        improve_skill_id=improve_skill_id,
        improvement_effect=improvement_effect,
    )
    return result_to_response(
        progression_engine.apply_level_up(character_id, request), lambda outcome: outcome.to_dict()
    )


async def apply_damage(character_id: str, amount: int) -> Dict[str, Any]:
    """Reduce a character's health; it never drops below zero."""
    if not health_tracker:
        return NOT_INITIALIZED
    return _character_response(health_tracker.apply_damage(character_id, amount))


async def heal(character_id: str, amount: int) -> Dict[str, Any]:
    """Restore health up to the character's maximum."""
    if not health_tracker:
        return NOT_INITIALIZED
    return _character_response(health_tracker.heal(character_id, amount))


async def set_max_health(character_id: str, value: int) -> Dict[str, Any]:
    """Set maximum health (at least 1); current health is clamped to it."""
    if not health_tracker:
        return NOT_INITIALIZED
    return _character_response(health_tracker.set_max_health(character_id, value))


async def adjust_max_health(character_id: str, delta: int) -> Dict[str, Any]:
    """Raise or lower maximum health by ``delta``."""
    if not health_tracker:
        return NOT_INITIALIZED
    return _character_response(health_tracker.adjust_max_health(character_id, delta))
