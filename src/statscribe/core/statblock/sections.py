"""Statblock section identifiers and the ordered table of section header recognizers"""

import re
from enum import Enum
from typing import Iterable, Optional

from statscribe.core.detect.patterns import ABILITY_RE, SIZE_RE, TYPE_RE


class SectionId(str, Enum):
    """Closed set of statblock sections a line can be tagged with"""
    ability_scores = "abilityScores"
    actions = "actions"
    armor = "armor"
    bonus_actions = "bonusActions"
    challenge = "challenge"
    condition_immunities = "conditionImmunities"
    damage_immunities = "damageImmunities"
    damage_resistances = "damageResistances"
    damage_vulnerabilities = "damageVulnerabilities"
    features = "features"
    gear = "gear"
    health = "health"
    initiative = "initiative"
    lair_actions = "lairActions"
    languages = "languages"
    legendary_actions = "legendaryActions"
    mythic_actions = "mythicActions"
    name = "name"
    proficiency_bonus = "proficiencyBonus"
    racial_details = "racialDetails"
    reactions = "reactions"
    saving_throws = "savingThrows"
    senses = "senses"
    skills = "skills"
    speed = "speed"
    traits = "traits"
    villain_actions = "villainActions"
    other = "other"

    @property
    def is_top_level(self) -> bool:
        """Top-level sections appear once, on one line, before any named-entry list."""
        return self in TOP_LEVEL_SECTIONS


TOP_LEVEL_SECTIONS = frozenset({
    SectionId.ability_scores,
    SectionId.armor,
    SectionId.challenge,
    SectionId.condition_immunities,
    SectionId.damage_immunities,
    SectionId.damage_resistances,
    SectionId.damage_vulnerabilities,
    SectionId.gear,
    SectionId.health,
    SectionId.initiative,
    SectionId.languages,
    SectionId.proficiency_bonus,
    SectionId.racial_details,
    SectionId.saving_throws,
    SectionId.senses,
    SectionId.skills,
    SectionId.speed,
})

# Sections whose body is a list of "Title. Description" entries.
ENTRY_SECTIONS = frozenset({
    SectionId.actions,
    SectionId.bonus_actions,
    SectionId.features,
    SectionId.lair_actions,
    SectionId.legendary_actions,
    SectionId.mythic_actions,
    SectionId.reactions,
    SectionId.traits,
    SectionId.villain_actions,
})


def _header(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# Consulted in order; first match wins. Name, Features, and Other have no header:
# the tagger assigns them from line position and shape.
SECTION_HEADERS: list[tuple[SectionId, re.Pattern]] = [
    (SectionId.racial_details,         _header(rf"^{SIZE_RE}(?:\s+or\s+{SIZE_RE})?\s+(?:swarm\s+of\s+\w+\s+)?{TYPE_RE}s?\b")),
    (SectionId.armor,                  _header(r"^(?:armor\s+class|ac)\s+\d+")),
    (SectionId.health,                 _header(r"^(?:hit\s+points|hp)\s+\d+")),
    (SectionId.speed,                  _header(r"^speed\s+\S")),
    (SectionId.initiative,             _header(r"^initiative\s+[+-]?\d+")),
    (SectionId.ability_scores,         _header(rf"^{ABILITY_RE}\s+\d+\s*(?:\(\s*[+-]?\d+\s*\)|[+-]\d+)")),
    (SectionId.saving_throws,          _header(r"^(?:saving\s+throws|saves)\s+\S")),
    (SectionId.skills,                 _header(r"^skills\s+\S")),
    (SectionId.damage_vulnerabilities, _header(r"^(?:damage\s+)?vulnerabilities\s+\S")),
    (SectionId.damage_resistances,     _header(r"^(?:damage\s+)?resistances\s+\S")),
    (SectionId.condition_immunities,   _header(r"^condition\s+immunities\s+\S")),
    (SectionId.damage_immunities,      _header(r"^(?:damage\s+)?immunities\s+\S")),
    (SectionId.gear,                   _header(r"^gear\s+\S")),
    (SectionId.senses,                 _header(r"^senses\s+\S")),
    (SectionId.languages,              _header(r"^languages\s+\S")),
    (SectionId.challenge,              _header(r"^(?:challenge|cr)\s+\d+(?:/\d+)?")),
    (SectionId.proficiency_bonus,      _header(r"^proficiency\s+bonus\s+[+-]?\d+")),
    (SectionId.traits,                 _header(r"^traits$")),
    (SectionId.actions,                _header(r"^actions$")),
    (SectionId.bonus_actions,          _header(r"^bonus\s+actions$")),
    (SectionId.reactions,              _header(r"^reactions$")),
    (SectionId.legendary_actions,      _header(r"^legendary\s+actions$")),
    (SectionId.lair_actions,           _header(r"^lair\s+actions$")),
    (SectionId.mythic_actions,         _header(r"^mythic\s+actions$")),
    (SectionId.villain_actions,        _header(r"^villain\s+actions$")),
]

HEADER_PATTERNS: dict[SectionId, re.Pattern] = dict(SECTION_HEADERS)


def match_header(line: str, exclude: Iterable[SectionId] = ()) -> Optional[SectionId]:
    """Return the first section whose header recognizer matches line, skipping excluded sections."""
    excluded = set(exclude)
    for section, pattern in SECTION_HEADERS:
        if section not in excluded and pattern.match(line):
            return section
    return None
