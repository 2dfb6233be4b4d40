"""Per-section field extractors: tagged statblock lines in, typed fields out.

Every extractor takes the lines tagged with one section and returns that
section's typed value. A missing or malformed section never raises: it yields
the typed default, and when a notes list is passed a Diagnostic is appended.
"""

import re
from fractions import Fraction
from typing import Optional

from statscribe.core.detect.patterns import ALIGNMENT_RE, CONDITIONS, SIZE_RE, TYPE_RE
from statscribe.core.models import (
    AbilityScores,
    ArmorClass,
    Challenge,
    Diagnostic,
    HitPoints,
    NamedEntry,
    SavingThrow,
    Sense,
    Skill,
    Speed,
)
from statscribe.core.statblock.sections import HEADER_PATTERNS, SectionId
from statscribe.core.statblock.tagger import ENTRY_TITLE_RE, TaggedLine


Notes = Optional[list[Diagnostic]]

RACIAL_DETAILS_RE = re.compile(
    rf"^(?P<size>{SIZE_RE})(?:\s+or\s+{SIZE_RE})?\s+(?:swarm\s+of\s+\w+\s+)?(?P<type>{TYPE_RE})s?"
    rf"(?:\s*\((?P<subtype>[^)]+)\))?\s*(?:,\s*(?P<alignment>{ALIGNMENT_RE})\b)?",
    re.IGNORECASE,
)
ARMOR_RE = re.compile(r"^(?:armor\s+class|ac)\s+(\d+)(?:\s*\(([^)]*)\))?", re.IGNORECASE)
HEALTH_RE = re.compile(r"^(?:hit\s+points|hp)\s+(\d+)(?:\s*\(([^)]*)\))?", re.IGNORECASE)
SPEED_TOKEN_RE = re.compile(r"^(?:([a-z]+)\s+)?(\d+)\s*(?:ft\.?|feet)?(?:\s*\(([^)]*)\))?$", re.IGNORECASE)
ABILITY_SCORE_RE = re.compile(
    r"\b(STR|DEX|CON|INT|WIS|CHA)\s+(\d+)(?:\s*\(\s*[+-]?\d+\s*\)|\s+[+-]\d+(?:\s+[+-]\d+)?)?",
    re.IGNORECASE,
)
SAVE_TOKEN_RE = re.compile(r"^(str|dex|con|int|wis|cha)[a-z]*\.?\s+([+-]\s*\d+)$", re.IGNORECASE)
SKILL_TOKEN_RE = re.compile(r"^([a-z][a-z ]*?)\s+([+-]\s*\d+)$", re.IGNORECASE)
SENSE_TOKEN_RE = re.compile(r"^(.+?)\s+(\d+)\s*(?:ft\.?|feet)?(?:\s*\(([^)]*)\))?$", re.IGNORECASE)
CHALLENGE_RE = re.compile(r"^(?:challenge|cr)\s+(\d+(?:/\d+)?)(?:\s*\(([^)]*)\))?", re.IGNORECASE)
XP_RE = re.compile(r"(\d{1,3}(?:,\d{3})+|\d+)")
PB_RE = re.compile(r"\b(?:PB|proficiency\s+bonus)\s*\+?\s*(-?\d+)", re.IGNORECASE)
INITIATIVE_RE = re.compile(r"\binitiative\s+([+-]\s*\d+)", re.IGNORECASE)

ABILITY_FIELDS = {
    "str": "strength",
    "dex": "dexterity",
    "con": "constitution",
    "int": "intelligence",
    "wis": "wisdom",
    "cha": "charisma",
}

EMPTY_VALUES = {"", "none", "-", "--", "—"}

# Header prefixes stripped before splitting list-valued lines.
LIST_PREFIX_RE = {
    SectionId.saving_throws:          re.compile(r"^(?:saving\s+throws|saves)\s*:?\s*", re.IGNORECASE),
    SectionId.skills:                 re.compile(r"^skills\s*:?\s*", re.IGNORECASE),
    SectionId.damage_vulnerabilities: re.compile(r"^(?:damage\s+)?vulnerabilities\s*:?\s*", re.IGNORECASE),
    SectionId.damage_resistances:     re.compile(r"^(?:damage\s+)?resistances\s*:?\s*", re.IGNORECASE),
    SectionId.damage_immunities:      re.compile(r"^(?:damage\s+)?immunities\s*:?\s*", re.IGNORECASE),
    SectionId.condition_immunities:   re.compile(r"^condition\s+immunities\s*:?\s*", re.IGNORECASE),
    SectionId.senses:                 re.compile(r"^senses\s*:?\s*", re.IGNORECASE),
    SectionId.languages:              re.compile(r"^languages\s*:?\s*", re.IGNORECASE),
    SectionId.gear:                   re.compile(r"^gear\s*:?\s*", re.IGNORECASE),
    SectionId.speed:                  re.compile(r"^speed\s*:?\s*", re.IGNORECASE),
}


def _note(notes: Notes, section: SectionId, message: str, line: Optional[TaggedLine] = None) -> None:
    if notes is not None:
        notes.append(Diagnostic(section=section.value, message=message, line=line.line_number if line else None))


def _joined(lines: list[TaggedLine]) -> str:
    """A top-level section's text; wrapped continuation lines are space-joined."""
    return " ".join(tl.text for tl in lines)


def _split_list(text: str) -> list[str]:
    """Split on commas and semicolons that sit outside parentheses."""
    parts, depth, buf = [], 0, []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        if ch in ",;" and depth == 0:
            parts.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    parts.append("".join(buf))
    return [p.strip() for p in parts if p.strip()]


def _list_body(section: SectionId, lines: list[TaggedLine]) -> str:
    return LIST_PREFIX_RE[section].sub("", _joined(lines), count=1).strip()


def _signed(text: str) -> int:
    return int(text.replace(" ", ""))


# --- one-line attributes ---

def extract_racial_details(lines: list[TaggedLine], notes: Notes = None) -> dict[str, str]:
    """Return size, creature_type, subtype, and alignment (lower-case; '' when absent)."""
    details = {"size": "", "creature_type": "", "subtype": "", "alignment": ""}
    if not lines:
        _note(notes, SectionId.racial_details, "missing size/type/alignment line")
        return details
    m = RACIAL_DETAILS_RE.match(lines[0].text)
    if not m:
        _note(notes, SectionId.racial_details, "unrecognized size/type/alignment line", lines[0])
        return details
    details["size"] = m.group("size").lower()
    details["creature_type"] = m.group("type").lower()
    details["subtype"] = (m.group("subtype") or "").strip().lower()
    if m.group("alignment"):
        details["alignment"] = m.group("alignment").lower()
    else:
        _note(notes, SectionId.racial_details, "no alignment found", lines[0])
    return details


def extract_armor(lines: list[TaggedLine], notes: Notes = None) -> ArmorClass:
    m = ARMOR_RE.match(lines[0].text) if lines else None
    if not m:
        _note(notes, SectionId.armor, "no armor class value", lines[0] if lines else None)
        return ArmorClass()
    return ArmorClass(value=int(m.group(1)), formula=(m.group(2) or "").strip())


def extract_health(lines: list[TaggedLine], notes: Notes = None) -> HitPoints:
    m = HEALTH_RE.match(lines[0].text) if lines else None
    if not m:
        _note(notes, SectionId.health, "no hit point value", lines[0] if lines else None)
        return HitPoints()
    return HitPoints(value=int(m.group(1)), formula=(m.group(2) or "").strip())


def extract_speed(lines: list[TaggedLine], notes: Notes = None) -> list[Speed]:
    """Comma-separated movement modes; an unlabeled distance is a walk speed."""
    if not lines:
        _note(notes, SectionId.speed, "missing speed line")
        return []
    speeds = []
    for token in _split_list(_list_body(SectionId.speed, lines)):
        m = SPEED_TOKEN_RE.match(token)
        if not m:
            _note(notes, SectionId.speed, f"unrecognized speed {token!r}", lines[0])
            continue
        speeds.append(Speed(
            movement_type=(m.group(1) or "walk").lower(),
            distance=int(m.group(2)),
            qualifier=(m.group(3) or "").strip(),
        ))
    return speeds


def extract_abilities(lines: list[TaggedLine], notes: Notes = None) -> AbilityScores:
    """Six 'ABBR score (modifier)' pairs, on one line or several; missing abilities stay 10."""
    scores: dict[str, int] = {}
    for tl in lines:
        for m in ABILITY_SCORE_RE.finditer(tl.text):
            scores.setdefault(ABILITY_FIELDS[m.group(1).lower()], int(m.group(2)))
    if lines and len(scores) < len(ABILITY_FIELDS):
        missing = sorted(set(ABILITY_FIELDS.values()) - set(scores))
        _note(notes, SectionId.ability_scores, f"missing ability scores: {', '.join(missing)}", lines[0])
    return AbilityScores(**scores)


def extract_saving_throws(lines: list[TaggedLine], notes: Notes = None) -> list[SavingThrow]:
    saves = []
    if not lines:
        return saves
    for token in _split_list(_list_body(SectionId.saving_throws, lines)):
        m = SAVE_TOKEN_RE.match(token)
        if m:
            saves.append(SavingThrow(ability=m.group(1).lower(), bonus=_signed(m.group(2))))
        else:
            _note(notes, SectionId.saving_throws, f"unrecognized saving throw {token!r}", lines[0])
    return saves


def extract_skills(lines: list[TaggedLine], notes: Notes = None) -> list[Skill]:
    skills = []
    if not lines:
        return skills
    for token in _split_list(_list_body(SectionId.skills, lines)):
        m = SKILL_TOKEN_RE.match(token)
        if m:
            skills.append(Skill(skill_name=m.group(1).strip(), bonus=_signed(m.group(2))))
        else:
            _note(notes, SectionId.skills, f"unrecognized skill {token!r}", lines[0])
    return skills


def extract_trait_list(section: SectionId, lines: list[TaggedLine]) -> list[str]:
    """Lower-cased comma list shared by damage and condition sections."""
    if not lines:
        return []
    body = _list_body(section, lines)
    items = []
    for token in _split_list(body):
        token = re.sub(r"^and\s+", "", token, flags=re.IGNORECASE).strip().lower()
        if token not in EMPTY_VALUES:
            items.append(token)
    return items


def split_immunities(lines: list[TaggedLine]) -> tuple[list[str], list[str]]:
    """Split an immunities line into (damage, conditions).

    A 'Damage Immunities' line is all damage; a bare 'Immunities' line mixes
    damage types and conditions, told apart by the condition vocabulary.
    """
    items = extract_trait_list(SectionId.damage_immunities, lines)
    if not lines or lines[0].text.lower().startswith("damage"):
        return items, []
    damage = [i for i in items if i not in CONDITIONS]
    conditions = [i for i in items if i in CONDITIONS]
    return damage, conditions


def extract_senses(lines: list[TaggedLine], notes: Notes = None) -> list[Sense]:
    """Ranged senses keep their distance; qualitative senses are flagged special."""
    senses = []
    if not lines:
        return senses
    for token in _split_list(_list_body(SectionId.senses, lines)):
        m = SENSE_TOKEN_RE.match(token)
        if m:
            senses.append(Sense(
                sense_type=m.group(1).strip().lower(),
                range=int(m.group(2)),
                qualifier=(m.group(3) or "").strip(),
            ))
        elif token.lower() not in EMPTY_VALUES:
            senses.append(Sense(sense_type=token.lower(), special=True))
    return senses


def extract_languages(lines: list[TaggedLine]) -> list[str]:
    if not lines:
        return []
    return [t for t in _split_list(_list_body(SectionId.languages, lines)) if t.lower() not in EMPTY_VALUES]


def extract_gear(lines: list[TaggedLine]) -> list[str]:
    if not lines:
        return []
    return _split_list(_list_body(SectionId.gear, lines))


def extract_challenge(lines: list[TaggedLine], notes: Notes = None) -> Challenge:
    """'Challenge 1/4 (50 XP)' or 'CR 1/4 (XP 50; PB +2)'; fractions become floats."""
    m = CHALLENGE_RE.match(lines[0].text) if lines else None
    if not m:
        _note(notes, SectionId.challenge, "no challenge rating", lines[0] if lines else None)
        return Challenge()
    try:
        rating = float(Fraction(m.group(1)))
    except ZeroDivisionError:
        _note(notes, SectionId.challenge, f"invalid challenge rating {m.group(1)!r}", lines[0])
        return Challenge()
    xp_match = XP_RE.search(m.group(2) or "")
    if not xp_match:
        _note(notes, SectionId.challenge, "no XP value", lines[0])
    xp = int(xp_match.group(1).replace(",", "")) if xp_match else 0
    return Challenge(rating=rating, xp=xp)


def extract_proficiency_bonus(
    lines: list[TaggedLine],
    challenge_lines: Optional[list[TaggedLine]] = None,
    ) -> Optional[int]:
    """Own 'Proficiency Bonus +N' line, else a 'PB +N' inside the challenge line."""
    for tl in [*lines, *(challenge_lines or [])]:
        m = PB_RE.search(tl.text)
        if m:
            return int(m.group(1))
    return None


def extract_initiative(
    lines: list[TaggedLine],
    armor_lines: Optional[list[TaggedLine]] = None,
    ) -> Optional[int]:
    """Own 'Initiative +N' line, else one sharing the armor class line."""
    for tl in [*lines, *(armor_lines or [])]:
        m = INITIATIVE_RE.search(tl.text)
        if m:
            return _signed(m.group(1))
    return None


# --- named-entry lists ---

def extract_named_entries(section: SectionId, lines: list[TaggedLine]) -> list[NamedEntry]:
    """Split a section's lines into titled entries.

    The header line is skipped. A 'Title. text' line opens a new entry; any
    other line continues the current entry's description. Lines before the
    first title (e.g. a legendary-actions preamble) are not entries.
    """
    header = HEADER_PATTERNS.get(section)
    body = lines[1:] if lines and header and header.match(lines[0].text) else lines

    entries: list[NamedEntry] = []
    name, parts = None, []
    for tl in body:
        m = ENTRY_TITLE_RE.match(tl.text)
        if m:
            if name is not None:
                entries.append(NamedEntry(name=name, description=" ".join(parts)))
            name = m.group("name").strip()
            rest = m.group("rest").strip()
            parts = [rest] if rest else []
        elif name is not None:
            parts.append(tl.text)
    if name is not None:
        entries.append(NamedEntry(name=name, description=" ".join(parts)))
    return entries


def extract_other(lines: list[TaggedLine]) -> list[str]:
    return [tl.text for tl in lines]
