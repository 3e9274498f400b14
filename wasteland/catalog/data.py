"""Static catalog tables for stats, skills and items.

Ids match the ones stored by earlier versions of the game, so old save
slots keep resolving against these tables.
"""

from typing import Dict, List, Optional

from .models import Item, ItemDefinition, ItemType, SkillDefinition, StatDefinition

STAT_NAMES = ("strength", "agility", "intelligence", "resistance", "charisma")

STATS: Dict[str, StatDefinition] = {
    stat.id: stat
    for stat in (
        StatDefinition(
            "strength",
            "Strength",
            "Lifting heavy objects and dealing damage in melee combat",
        ),
        StatDefinition("agility", "Agility", "Speed, reflexes and dexterity"),
        StatDefinition(
            "intelligence",
            "Intelligence",
            "Knowledge, problem solving and technical ability",
        ),
        StatDefinition(
            "resistance",
            "Resistance",
            "Physical endurance, resistance to disease and toxins",
        ),
        StatDefinition("charisma", "Charisma", "Persuasion, leadership and social influence"),
    )
}

PERSONAL_SKILLS: Dict[str, SkillDefinition] = {
    skill.id: skill
    for skill in (
        SkillDefinition("medicina", "Medicine", "Treat wounds and infections, stabilize."),
        SkillDefinition("supervivencia", "Survival", "Make fire, build shelters, track."),
        SkillDefinition("mecanica", "Mechanics", "Repair vehicles or simple machinery."),
        SkillDefinition("tecnologia", "Technology", "Hack, fix radios, use computers."),
        SkillDefinition("persuasion", "Persuasion", "Convince others, negotiate, calm."),
        SkillDefinition("intimidacion", "Intimidation", "Threaten, cause fear or impose."),
        SkillDefinition("sigilo", "Stealth", "Move without being seen or heard."),
        SkillDefinition("observacion", "Observation", "Notice hidden details or dangers."),
        SkillDefinition("atletismo", "Athletics", "Run, climb, swim, jump."),
        SkillDefinition("armas_fuego", "Firearms", "Use pistols, rifles, shotguns."),
        SkillDefinition("armas_blancas", "Melee weapons", "Knives, bats, machetes, close combat."),
        SkillDefinition("conduccion", "Driving", "Drive under pressure on rough roads."),
        SkillDefinition("ingenieria_casera", "Home engineering", "Build traps, repair structures."),
        SkillDefinition("orientacion", "Orientation", "Read maps and compasses, find north."),
        SkillDefinition("sigilo_urbano", "Urban stealth", "Quiet looting, escaping through the city."),
        SkillDefinition("empatia", "Empathy", "Read emotions, detect lies."),
        SkillDefinition("explosivos", "Explosives", "Build bombs, use dynamite or molotovs."),
        SkillDefinition("primeros_auxilios", "First aid", "Stop bleeding, quick bandages."),
        SkillDefinition("cultura_general", "General knowledge", "History, useful references, civic knowledge."),
        SkillDefinition("intuicion", "Intuition", "Sense that something is wrong, act without proof."),
    )
}

SPECIAL_SKILLS: Dict[str, SkillDefinition] = {
    skill.id: skill
    for skill in (
        SkillDefinition("combate_cuerpo", "Hand-to-hand combat", "Fight with melee weapons or bare hands"),
        SkillDefinition("armas_fuego", "Firearms", "Accuracy and handling of pistols, rifles and shotguns"),
        SkillDefinition("sigilo", "Stealth", "Move without being detected"),
        SkillDefinition("primeros_auxilios", "First aid", "Treat wounds and illness"),
        SkillDefinition("supervivencia", "Survival", "Find food, water and shelter in hostile places"),
        SkillDefinition("mecanica", "Mechanics", "Repair vehicles and build traps"),
        SkillDefinition("liderazgo", "Leadership", "Lead groups and keep morale high"),
        SkillDefinition("negociacion", "Negotiation", "Persuade and strike better deals"),
        SkillDefinition("atletismo", "Athletics", "Run, jump and climb efficiently"),
        SkillDefinition("rastreo", "Tracking", "Follow tracks and find hidden resources"),
        SkillDefinition("electronica", "Electronics", "Repair and hack electronic devices"),
        SkillDefinition("cocina", "Cooking", "Prepare nutritious meals from scarce supplies"),
        SkillDefinition("medico_campo", "Field medic", "Heal 1 HP per day to one character"),
        SkillDefinition("cazador", "Hunter", "Find food in the wild"),
        SkillDefinition("artesano", "Craftsman", "Build and repair objects from basic materials"),
        SkillDefinition("explorador", "Scout", "Find safe routes and avoid danger"),
    )
}

# Only the first twelve special skills are offered during character creation
CREATION_SPECIAL_SKILL_IDS = tuple(list(SPECIAL_SKILLS)[:12])

ITEMS: Dict[str, ItemDefinition] = {
    item.id: item
    for item in (
        ItemDefinition(
            "pistola",
            "9mm pistol",
            "A semi-automatic pistol with 12 rounds. Effective at short range.",
            ItemType.WEAPON,
            "🔫",
            weight=1.0,
            usable=True,
            damage=4,
        ),
        ItemDefinition(
            "botiquin",
            "First aid kit",
            "Bandages, antiseptics and basic painkillers.",
            ItemType.MEDICINE,
            "🧰",
            stackable=True,
            max_stack=3,
            weight=1.0,
            consumable=True,
            health_restore=3,
        ),
        ItemDefinition(
            "cuchillo",
            "Hunting knife",
            "A sharp, sturdy knife. Useful for melee combat and survival.",
            ItemType.WEAPON,
            "🔪",
            weight=0.5,
            damage=2,
        ),
        ItemDefinition(
            "linterna",
            "Tactical flashlight",
            "Rugged flashlight with long-life batteries.",
            ItemType.TOOL,
            "🔦",
            weight=0.5,
        ),
        ItemDefinition(
            "comida",
            "Emergency rations",
            "Canned food and energy bars for 3 days.",
            ItemType.FOOD,
            "🥫",
            stackable=True,
            max_stack=5,
            weight=1.5,
            consumable=True,
            health_restore=1,
        ),
        ItemDefinition(
            "agua",
            "Canteen with purifier",
            "Stores and purifies water found along the way.",
            ItemType.WATER,
            "🧴",
            weight=1.0,
        ),
        ItemDefinition(
            "mochila",
            "Tactical backpack",
            "Tough backpack with many compartments.",
            ItemType.CLOTHING,
            "🎒",
            weight=2.0,
            usable=False,
        ),
        ItemDefinition(
            "radio",
            "Emergency radio",
            "Hand-crank radio for emergency communications.",
            ItemType.TOOL,
            "📻",
            weight=1.0,
        ),
        ItemDefinition(
            "mapa",
            "City map",
            "Detailed map with evacuation routes marked.",
            ItemType.MISC,
            "🗺️",
            weight=0.1,
        ),
        ItemDefinition(
            "machete",
            "Machete",
            "Heavy blade for melee combat and clearing paths.",
            ItemType.WEAPON,
            "⚔️",
            weight=1.5,
            damage=3,
        ),
        # Loot handed out by game events
        ItemDefinition(
            "lata_conserva",
            "Canned food",
            "A can of preserved food in good condition.",
            ItemType.FOOD,
            "🥫",
            stackable=True,
            max_stack=10,
            weight=0.5,
            consumable=True,
            health_restore=1,
        ),
        ItemDefinition(
            "botella_agua",
            "Water bottle",
            "A sealed bottle of drinking water.",
            ItemType.WATER,
            "💧",
            stackable=True,
            max_stack=10,
            weight=0.5,
            consumable=True,
            health_restore=1,
        ),
        ItemDefinition(
            "municion_9mm",
            "9mm ammo",
            "A box of 9mm rounds.",
            ItemType.AMMO,
            "🔹",
            stackable=True,
            quantity=12,
            max_stack=50,
            weight=0.02,
            usable=False,
        ),
    )
}

# Items offered as starting equipment
STARTING_ITEM_IDS = (
    "pistola",
    "botiquin",
    "cuchillo",
    "linterna",
    "comida",
    "agua",
    "mochila",
    "radio",
    "mapa",
    "machete",
)


def get_stat(stat_id: str) -> Optional[StatDefinition]:
    return STATS.get(stat_id)


def get_personal_skill(skill_id: str) -> Optional[SkillDefinition]:
    return PERSONAL_SKILLS.get(skill_id)


def get_special_skill(skill_id: str) -> Optional[SkillDefinition]:
    return SPECIAL_SKILLS.get(skill_id)


def get_item_definition(item_id: str) -> Optional[ItemDefinition]:
    return ITEMS.get(item_id)


def create_item_copy(item_id: str) -> Optional[Item]:
    """Create a live item from its catalog id, or None for unknown ids."""
    definition = ITEMS.get(item_id)
    if definition is None:
        return None
    return definition.create_item()


def list_starting_items() -> List[ItemDefinition]:
    return [ITEMS[item_id] for item_id in STARTING_ITEM_IDS]


def list_creation_special_skills() -> List[SkillDefinition]:
    return [SPECIAL_SKILLS[skill_id] for skill_id in CREATION_SPECIAL_SKILL_IDS]
