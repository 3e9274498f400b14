"""MCP tool implementations for character creation."""

from typing import Any, Dict, Optional

from config.logging_config import get_logger

from ..catalog.data import PERSONAL_SKILLS, STATS, list_creation_special_skills, list_starting_items
from ..core.result_pattern import result_to_response
from .builder import CharacterBuilder
from .models import BuildStage

logger = get_logger(__name__)

# Initialized by main.py
character_builder: Optional[CharacterBuilder] = None

NOT_INITIALIZED = {"success": False, "message": "Character builder not initialized"}


def initialize_creation_tools(builder: CharacterBuilder) -> None:
    """
    Initialize creation tools with required dependencies.

    Args:
        builder: Character builder holding the active draft
    """
    global character_builder
    character_builder = builder
    logger.info("Character creation MCP tools initialized")


def register_creation_tools(mcp_server) -> None:
    """
    Register character creation tools with the MCP server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
    """
    mcp_server.tool()(get_creation_options)
    mcp_server.tool()(start_character_creation)
    mcp_server.tool()(get_creation_state)
    mcp_server.tool()(set_character_basics)
    mcp_server.tool()(set_character_image)
    mcp_server.tool()(change_stat)
    mcp_server.tool()(toggle_personal_skill)
    mcp_server.tool()(change_personal_skill_points)
    mcp_server.tool()(toggle_special_skill)
    mcp_server.tool()(advance_creation)
    mcp_server.tool()(go_back_creation)
    mcp_server.tool()(save_character_draft)
    mcp_server.tool()(continue_to_inventory)
    mcp_server.tool()(toggle_starting_item)
    mcp_server.tool()(finalize_character)
    mcp_server.tool()(reset_character_creation)
    logger.info("Character creation MCP tools registered")


def _draft_response(result) -> Dict[str, Any]:
    return result_to_response(result, lambda draft: draft.to_dict())


async def get_creation_options() -> Dict[str, Any]:
    """
    List the stats, skills and starting items offered during creation.

    Returns:
        Catalog entries for every creation choice
    """
    return {
        "success": True,
        "data": {
            "stats": [vars(stat) for stat in STATS.values()],
            "personal_skills": [vars(skill) for skill in PERSONAL_SKILLS.values()],
            "special_skills": [vars(skill) for skill in list_creation_special_skills()],
            "starting_items": [definition.create_item().to_dict() for definition in list_starting_items()],
        },
    }


async def start_character_creation(resume: bool = True) -> Dict[str, Any]:
    """
    Start character creation.

    Args:
        resume: Continue the stored draft when one exists instead of starting over

    Returns:
        The active draft
    """
    if not character_builder:
        return NOT_INITIALIZED
    result = character_builder.resume() if resume else character_builder.start()
    return _draft_response(result)


async def get_creation_state() -> Dict[str, Any]:
    """Return the active draft with its derived values and stage."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.get_state())


async def set_character_basics(
    name: Optional[str] = None,
    age: Optional[int] = None,
    background: Optional[str] = None,
    appearance: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Set the survivor's name, age, background and appearance.

    Args:
        name: Character name
        age: Age in years
        background: Life before the outbreak
        appearance: Physical description
    """
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(
        character_builder.set_basics(name=name, age=age, background=background, appearance=appearance)
    )


async def set_character_image(image_data: Optional[str] = None) -> Dict[str, Any]:
    """Attach an encoded portrait to the draft, or clear it."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.set_image(image_data))


async def change_stat(stat: str, change: int) -> Dict[str, Any]:
    """
    Raise or lower a base stat by one point.

    Args:
        stat: strength, agility, intelligence, resistance or charisma
        change: +1 or -1
    """
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.change_stat(stat, change))


async def toggle_personal_skill(skill_id: str) -> Dict[str, Any]:
    """Select or deselect a personal skill."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.toggle_personal_skill(skill_id))


async def change_personal_skill_points(skill_id: str, change: int) -> Dict[str, Any]:
    """
    Move one point into or out of a selected personal skill.

    Args:
        skill_id: Selected personal skill
        change: +1 or -1
    """
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.change_personal_skill_points(skill_id, change))


async def toggle_special_skill(skill_id: str) -> Dict[str, Any]:
    """Select or deselect one of the two special skills."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.toggle_special_skill(skill_id))


async def advance_creation() -> Dict[str, Any]:
    """Move to the next creation stage if its requirements are met."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.advance())


async def go_back_creation(stage: Optional[str] = None) -> Dict[str, Any]:
    """
    Go back to an earlier stage.

    Args:
        stage: Target stage (basics, stats, personal_skills); defaults to the previous one
    """
    if not character_builder:
        return NOT_INITIALIZED
    if stage is None:
        return _draft_response(character_builder.go_back())
    try:
        target = BuildStage(stage)
    except ValueError:
        return {"success": False, "message": f"Unknown stage: {stage}"}
    return _draft_response(character_builder.go_to(target))


async def save_character_draft() -> Dict[str, Any]:
    """Confirm the special skills and move on to the health review."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.save())


async def continue_to_inventory() -> Dict[str, Any]:
    """Leave the health review and choose starting items."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.continue_to_inventory())


async def toggle_starting_item(item_id: str) -> Dict[str, Any]:
    """Add or remove one of the two starting items."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.toggle_inventory_item(item_id))


async def finalize_character() -> Dict[str, Any]:
    """
    Finish creation and save the character.

    Returns:
        The saved character, including its new id
    """
    if not character_builder:
        return NOT_INITIALIZED
    return result_to_response(character_builder.finalize(), lambda character: character.to_dict())


async def reset_character_creation() -> Dict[str, Any]:
    """Discard the draft and start a new one."""
    if not character_builder:
        return NOT_INITIALIZED
    return _draft_response(character_builder.reset())
