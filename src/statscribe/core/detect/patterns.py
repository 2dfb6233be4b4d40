"""Shared keyword vocabularies and signature regexes for stat-block literature"""

import re


SIZES = ("tiny", "small", "medium", "large", "huge", "gargantuan")

CREATURE_TYPES = (
    "aberration", "beast", "celestial", "construct", "dragon", "elemental", "fey",
    "fiend", "giant", "humanoid", "monstrosity", "ooze", "plant", "undead",
)

# Longest phrases first so alternation never stops at a shorter prefix ("neutral" vs "neutral evil").
ALIGNMENTS = (
    "any non-good alignment", "any non-evil alignment", "any non-lawful alignment",
    "any non-chaotic alignment", "any chaotic alignment", "any lawful alignment",
    "any evil alignment", "any good alignment", "any neutral alignment", "any alignment",
    "lawful good", "neutral good", "chaotic good",
    "lawful neutral", "chaotic neutral",
    "lawful evil", "neutral evil", "chaotic evil",
    "typically lawful good", "typically neutral good", "typically chaotic good",
    "typically lawful neutral", "typically chaotic neutral",
    "typically lawful evil", "typically neutral evil", "typically chaotic evil",
    "typically neutral", "unaligned", "neutral",
)

SCHOOLS = (
    "abjuration", "conjuration", "divination", "enchantment",
    "evocation", "illusion", "necromancy", "transmutation",
)

ITEM_TYPES = (
    "wondrous item", "armor", "weapon", "ring", "rod", "staff", "wand",
    "potion", "scroll", "tool", "kit", "supplies", "instrument",
)

# "very rare" before "rare", "uncommon" before "common".
RARITIES = ("very rare", "uncommon", "common", "rare", "legendary", "artifact")

DAMAGE_TYPES = (
    "acid", "bludgeoning", "cold", "fire", "force", "lightning", "necrotic",
    "piercing", "poison", "psychic", "radiant", "slashing", "thunder",
)

CONDITIONS = (
    "blinded", "charmed", "deafened", "exhaustion", "frightened", "grappled",
    "incapacitated", "invisible", "paralyzed", "petrified", "poisoned", "prone",
    "restrained", "stunned", "unconscious",
)

ABILITY_ABBREVIATIONS = ("str", "dex", "con", "int", "wis", "cha")


def alternation(words: tuple[str, ...]) -> str:
    """Return a non-capturing regex alternation of the escaped vocabulary."""
    return "(?:" + "|".join(re.escape(w) for w in words) + ")"


SIZE_RE = alternation(SIZES)
TYPE_RE = alternation(CREATURE_TYPES)
ALIGNMENT_RE = alternation(ALIGNMENTS)
SCHOOL_RE = alternation(SCHOOLS)
ITEM_TYPE_RE = alternation(ITEM_TYPES)
RARITY_RE = alternation(RARITIES)
DAMAGE_TYPE_RE = alternation(DAMAGE_TYPES)
ABILITY_RE = alternation(ABILITY_ABBREVIATIONS)

ORDINAL_LEVEL_RE = r"\d+(?:st|nd|rd|th)[-\s]?level"

# Genre-defining second lines, matched against a single stripped line.
SPELL_SIGNATURE = re.compile(
    rf"^(?:{ORDINAL_LEVEL_RE}\s+{SCHOOL_RE}(?:\s+spell)?|{SCHOOL_RE}\s+cantrip|"
    rf"level\s+\d+\s+{SCHOOL_RE}(?:\s+spell)?)\b(?:\s*\(ritual\))?",
    re.IGNORECASE,
)
ITEM_SIGNATURE = re.compile(
    rf"^{ITEM_TYPE_RE}\b(?:\s*\([^)]*\))?\s*,?\s*(?:rarity\s+varies|{RARITY_RE})\b",
    re.IGNORECASE,
)
MONSTER_SIGNATURE = re.compile(
    rf"^{SIZE_RE}(?:\s+or\s+{SIZE_RE})?\s+(?:swarm\s+of\s+\w+\s+)?{TYPE_RE}s?\b",
    re.IGNORECASE,
)
CLASS_FEATURE_SIGNATURE = re.compile(
    rf"^(?:[\w\s]+\s)?{ORDINAL_LEVEL_RE}\s+(?:[a-z]+\s+)?(?:class\s+)?feature\b|"
    r"^level\s+\d+\s*:?\s+(?:[a-z]+\s+)?feature\b",
    re.IGNORECASE,
)
FEAT_SIGNATURE = re.compile(
    r"^(?:(?:general|origin|fighting style|epic boon)\s+)?feat\b|^prerequisite\s*:",
    re.IGNORECASE,
)
BACKGROUND_SIGNATURE = re.compile(r"^background\b", re.IGNORECASE)
