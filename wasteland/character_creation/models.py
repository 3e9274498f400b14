"""Character data models for the creation flow and the persisted record."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from ..catalog.models import Item
from ..core.error_handling import DataIntegrityError

# Stat keys written by the first releases of the game
LEGACY_STAT_KEYS = {
    "fuerza": "strength",
    "agilidad": "agility",
    "inteligencia": "intelligence",
    "resistencia": "resistance",
    "carisma": "charisma",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp, accepting the trailing ``Z`` used by older saves."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(text)
    else:
        return utc_now()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BuildStage(Enum):
    """Ordered stages of the character creation flow."""

    BASICS = "basics"
    STATS = "stats"
    PERSONAL_SKILLS = "personal_skills"
    SPECIAL_SKILLS = "special_skills"
    HEALTH_REVIEW = "health_review"
    INVENTORY = "inventory"
    COMPLETE = "complete"


@dataclass
class CharacterStats:
    """The five base attributes."""

    strength: int = 1
    agility: int = 1
    intelligence: int = 1
    resistance: int = 1
    charisma: int = 1

    def get(self, name: str) -> int:
        return getattr(self, name)

    def set(self, name: str, value: int) -> None:
        setattr(self, name, value)

    def total(self) -> int:
        return self.strength + self.agility + self.intelligence + self.resistance + self.charisma

    def to_dict(self) -> Dict[str, int]:
        return {
            "strength": self.strength,
            "agility": self.agility,
            "intelligence": self.intelligence,
            "resistance": self.resistance,
            "charisma": self.charisma,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CharacterStats":
        """Create from a stats mapping, translating legacy keys."""
        values = {}
        for key, value in data.items():
            name = LEGACY_STAT_KEYS.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = int(value)
        return cls(**values)


@dataclass
class PersonalSkill:
    """A point-buy skill held by a character."""

    id: str
    name: str
    points: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "points": self.points}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalSkill":
        return cls(id=data["id"], name=data.get("name", data["id"]), points=int(data.get("points", 1)))


@dataclass
class CustomSkill:
    """A user-authored special skill gained through leveling."""

    id: str
    name: str
    description: str
    improved: bool = False
    improved_effect: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "improved": self.improved,
        }
        if self.improved_effect is not None:
            data["improvedEffect"] = self.improved_effect
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomSkill":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            improved=bool(data.get("improved", False)),
            improved_effect=data.get("improvedEffect"),
        )


@dataclass
class ImprovedSkill:
    """Improvement recorded for a predefined special skill."""

    skill_id: str
    effect: str

    def to_dict(self) -> Dict[str, Any]:
        return {"skillId": self.skill_id, "effect": self.effect}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImprovedSkill":
        return cls(skill_id=data["skillId"], effect=data.get("effect", ""))


@dataclass
class HealthPool:
    """Current and maximum health, with ``0 <= current <= max``."""

    current: int
    max: int

    def to_dict(self) -> Dict[str, int]:
        return {"current": self.current, "max": self.max}

    @classmethod
    def from_dict(cls, data: Any) -> "HealthPool":
        # Drafts store health as a single number
        if isinstance(data, (int, float)):
            pool = cls(current=int(data), max=int(data))
        else:
            pool = cls(current=int(data["current"]), max=int(data["max"]))
        if pool.max < 1 or not 0 <= pool.current <= pool.max:
            raise DataIntegrityError(f"Health {pool.current}/{pool.max} is out of range", source="health")
        return pool


@dataclass
class DraftCharacter:
    """In-progress character edited by the creation flow."""

    name: str = ""
    age: int = 25
    background: str = ""
    appearance: str = ""
    image_data: Optional[str] = None
    stats: CharacterStats = field(default_factory=CharacterStats)
    personal_skills: List[PersonalSkill] = field(default_factory=list)
    special_skill_ids: List[str] = field(default_factory=list)
    inventory_draft_ids: List[str] = field(default_factory=list)
    stage: BuildStage = BuildStage.BASICS
    # Derived values, refreshed after every mutation
    points_left: int = 5
    total_stat_points: int = 5
    personal_skill_points_left: int = 5
    health: int = 10

    @property
    def selected_personal_skill_ids(self) -> List[str]:
        return [skill.id for skill in self.personal_skills]

    def find_personal_skill(self, skill_id: str) -> Optional[PersonalSkill]:
        for skill in self.personal_skills:
            if skill.id == skill_id:
                return skill
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "background": self.background,
            "appearance": self.appearance,
            "imageData": self.image_data,
            "stats": self.stats.to_dict(),
            "personalSkills": [skill.to_dict() for skill in self.personal_skills],
            "selectedPersonalSkills": self.selected_personal_skill_ids,
            "specialSkillIds": list(self.special_skill_ids),
            "inventoryDraftIds": list(self.inventory_draft_ids),
            "stage": self.stage.value,
            "pointsLeft": self.points_left,
            "totalStatPoints": self.total_stat_points,
            "personalSkillPointsLeft": self.personal_skill_points_left,
            "health": self.health,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftCharacter":
        """Create from the stored draft layout."""
        try:
            return cls(
                name=data.get("name", ""),
                age=int(data.get("age", 25)),
                background=data.get("background", ""),
                appearance=data.get("appearance", ""),
                image_data=data.get("imageData"),
                stats=CharacterStats.from_dict(data.get("stats", {})),
                personal_skills=[PersonalSkill.from_dict(s) for s in data.get("personalSkills", [])],
                special_skill_ids=list(data.get("specialSkillIds", data.get("specialSkills", []))),
                inventory_draft_ids=list(data.get("inventoryDraftIds", [])),
                stage=BuildStage(data.get("stage", BuildStage.BASICS.value)),
                points_left=int(data.get("pointsLeft", 5)),
                total_stat_points=int(data.get("totalStatPoints", 5)),
                personal_skill_points_left=int(data.get("personalSkillPointsLeft", 5)),
                health=int(data.get("health", 10)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataIntegrityError(f"Invalid draft data: {e}", source="draft") from e


@dataclass
class Character:
    """Canonical, playable character record."""

    name: str
    id: Optional[str] = None
    age: int = 25
    background: str = ""
    appearance: str = ""
    image_data: Optional[str] = None
    level: int = 1
    stats: CharacterStats = field(default_factory=CharacterStats)
    personal_skills: List[PersonalSkill] = field(default_factory=list)
    special_skill_ids: List[str] = field(default_factory=list)
    custom_skills: List[CustomSkill] = field(default_factory=list)
    improved_skills: List[ImprovedSkill] = field(default_factory=list)
    health: HealthPool = field(default_factory=lambda: HealthPool(10, 10))
    inventory: List[Item] = field(default_factory=list)
    inventory_capacity: int = 15
    created_at: datetime = field(default_factory=utc_now)
    last_updated: datetime = field(default_factory=utc_now)

    def touch(self) -> None:
        """Advance ``last_updated``, never moving it backwards."""
        self.last_updated = max(utc_now(), self.last_updated)

    def find_custom_skill(self, skill_id: str) -> Optional[CustomSkill]:
        for skill in self.custom_skills:
            if skill.id == skill_id:
                return skill
        return None

    def is_skill_improved(self, skill_id: str) -> bool:
        custom = self.find_custom_skill(skill_id)
        if custom is not None and custom.improved:
            return True
        return any(improved.skill_id == skill_id for improved in self.improved_skills)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted record layout."""
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "background": self.background,
            "appearance": self.appearance,
            "imageData": self.image_data,
            "level": self.level,
            "stats": self.stats.to_dict(),
            "personalSkills": [skill.to_dict() for skill in self.personal_skills],
            "specialSkillIds": list(self.special_skill_ids),
            "customSkills": [skill.to_dict() for skill in self.custom_skills],
            "improvedSkills": [skill.to_dict() for skill in self.improved_skills],
            "health": self.health.to_dict(),
            "inventory": [item.to_dict() for item in self.inventory],
            "inventoryCapacity": self.inventory_capacity,
            "createdAt": self.created_at.isoformat(),
            "lastUpdated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Character":
        """
        Create from the persisted record layout.

        Older records name the special skill list ``specialSkills``, use
        Spanish stat keys and may lack ``level``; all are accepted.
        """
        try:
            created_at = parse_timestamp(data.get("createdAt"))
            return cls(
                id=data.get("id"),
                name=data["name"],
                age=int(data.get("age", 25)),
                background=data.get("background", ""),
                appearance=data.get("appearance", ""),
                image_data=data.get("imageData"),
                level=int(data.get("level") or 1),
                stats=CharacterStats.from_dict(data.get("stats", {})),
                personal_skills=[PersonalSkill.from_dict(s) for s in data.get("personalSkills", [])],
                special_skill_ids=list(data.get("specialSkillIds", data.get("specialSkills", []))),
                custom_skills=[CustomSkill.from_dict(s) for s in data.get("customSkills", [])],
                improved_skills=[ImprovedSkill.from_dict(s) for s in data.get("improvedSkills", [])],
                health=HealthPool.from_dict(data.get("health", 10)),
                inventory=[Item.from_dict(item) for item in data.get("inventory", [])],
                inventory_capacity=int(data.get("inventoryCapacity", 15)),
                created_at=created_at,
                last_updated=parse_timestamp(data.get("lastUpdated", created_at)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataIntegrityError(f"Invalid character data: {e}", source="character") from e


@dataclass
class GameState:
    """A save slot: the character plus save metadata."""

    character: Character
    game_version: str = "1.0.0"
    save_date: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character": self.character.to_dict(),
            "gameVersion": self.game_version,
            "saveDate": self.save_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        if not isinstance(data, dict) or not isinstance(data.get("character"), dict):
            raise DataIntegrityError("Save record has no character", source="game_state")
        try:
            save_date = parse_timestamp(data.get("saveDate"))
        except (TypeError, ValueError) as e:
            raise DataIntegrityError(f"Invalid save date: {e}", source="game_state") from e
        return cls(
            character=Character.from_dict(data["character"]),
            game_version=data.get("gameVersion", "1.0.0"),
            save_date=save_date,
        )


@dataclass
class CharacterSummary:
    """Projection of a save slot used by the character list."""

    id: str
    name: str
    level: int
    health: HealthPool
    created_at: datetime
    last_updated: datetime
    image_data: Optional[str] = None

    @classmethod
    def from_character(cls, character: Character) -> "CharacterSummary":
        return cls(
            id=character.id or "",
            name=character.name,
            level=character.level,
            health=HealthPool(character.health.current, character.health.max),
            created_at=character.created_at,
            last_updated=character.last_updated,
            image_data=character.image_data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "health": self.health.to_dict(),
            "created_at": self.created_at.isoformat(),
            "last_updated": self.last_updated.isoformat(),
            "image_data": self.image_data,
        }
