"""Single-pass line parsers for spell, item, class feature, feat, and background blocks"""

import re
from typing import Optional

from statscribe.core.detect.patterns import (
    DAMAGE_TYPE_RE,
    ITEM_TYPES,
    RARITIES,
    SCHOOLS,
)
from statscribe.core.exceptions import EmptyInputError
from statscribe.core.models import (
    BackgroundRecord,
    ClassFeatureRecord,
    DamagePart,
    FeatRecord,
    ItemRecord,
    NamedEntry,
    SpellRecord,
)
from statscribe.core.utils.text import clean_text


WEAPON_PROPERTIES = (
    "ammunition", "finesse", "heavy", "light", "loading", "reach",
    "special", "thrown", "two-handed", "versatile",
)

ABILITY_ABBREV = {
    "strength": "str", "dexterity": "dex", "constitution": "con",
    "intelligence": "int", "wisdom": "wis", "charisma": "cha",
}

DAMAGE_RE = re.compile(rf"(\d+d\d+(?:\s*\+\s*\d+)?)\s+({DAMAGE_TYPE_RE})\s+damage", re.IGNORECASE)
SAVE_RE = re.compile(r"\b(strength|dexterity|constitution|intelligence|wisdom|charisma)\s+saving\s+throw", re.IGNORECASE)
HIGHER_LEVELS_RE = re.compile(r"^(?:at\s+higher\s+levels|using\s+a\s+higher-level\s+spell\s+slot|cantrip\s+upgrade)\s*[.:]\s*(.*)$", re.IGNORECASE)
SPELL_LEVEL_RE = re.compile(r"(\d+)(?:st|nd|rd|th)?[-\s]?level|level\s+(\d+)", re.IGNORECASE)
WEIGHT_RE = re.compile(r"weight\s*[:\t]?\s*(\d+(?:\.\d+)?)\s*(?:lb|pound)", re.IGNORECASE)
PRICE_RE = re.compile(r"(?:price|cost|value)\s*[:\t]?\s*(\d+(?:,\d{3})*(?:\.\d+)?)\s*(gp|gold|sp|silver|cp|copper)", re.IGNORECASE)
ATTUNEMENT_RE = re.compile(r"\(requires attunement(?:\s+by\s+([^)]+))?\)", re.IGNORECASE)
FEATURE_LEVEL_RE = re.compile(r"(\d+)(?:st|nd|rd|th)[-\s]?level|level\s+(\d+)", re.IGNORECASE)
CLASS_NAME_RE = re.compile(
    r"(?:level\s+\d+\s*:?|\d+(?:st|nd|rd|th)[-\s]?level)\s+([a-z]+)\s+(?:class\s+)?feature"
    r"|^([a-z]+)\s+\d+(?:st|nd|rd|th)[-\s]?level",
    re.IGNORECASE,
)
PREREQUISITE_RE = re.compile(r"prerequisites?\s*:\s*([^)\n]+)", re.IGNORECASE)
BACKGROUND_FEATURE_RE = re.compile(r"^feature\s*:\s*(.+)$", re.IGNORECASE)

PRICE_DIVISORS = {"gp": 1, "gold": 1, "sp": 10, "silver": 10, "cp": 100, "copper": 100}

# Spell/item/background lines written as "Key: value".
KEY_VALUE_RE = re.compile(r"^([A-Za-z][A-Za-z ]{1,30}?)\s*:\s*(.*)$")


def _lines(text: str) -> list[str]:
    lines = [ln.strip() for ln in clean_text(text).split("\n") if ln.strip()]
    if not lines:
        raise EmptyInputError()
    return lines


def _key_values(lines: list[str]) -> dict[str, str]:
    """First occurrence of every 'Key: value' line, keys lower-cased."""
    values: dict[str, str] = {}
    for line in lines:
        m = KEY_VALUE_RE.match(line)
        if m:
            values.setdefault(m.group(1).strip().lower(), m.group(2).strip())
    return values


def _description(lines: list[str], skip_keys: tuple[str, ...] = ()) -> str:
    """Body text: everything after the two header lines that is not a recognized key line."""
    body = []
    for line in lines[2:]:
        m = KEY_VALUE_RE.match(line)
        if m and m.group(1).strip().lower() in skip_keys:
            continue
        body.append(line)
    return "\n".join(body)


def _first_of(vocabulary: tuple[str, ...], text: str) -> str:
    """First vocabulary word present in text; vocabulary order decides ties."""
    lowered = text.lower()
    return next((w for w in vocabulary if re.search(rf"\b{re.escape(w)}\b", lowered)), "")


def _dice_key(dice: str) -> tuple[int, int, int]:
    m = re.match(r"(\d+)d(\d+)(?:\+(\d+))?", dice)
    return (int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)) if m else (0, 0, 0)


def damage_parts(description: str) -> list[DamagePart]:
    """Damage rolls by type; when a type repeats (higher-level text), the largest roll wins."""
    best: dict[str, str] = {}
    for m in DAMAGE_RE.finditer(description):
        dice, damage_type = re.sub(r"\s+", "", m.group(1)), m.group(2).lower()
        if damage_type not in best or _dice_key(dice) > _dice_key(best[damage_type]):
            best[damage_type] = dice
    return [DamagePart(dice=d, damage_type=t) for t, d in best.items()]


def save_ability(description: str) -> str:
    m = SAVE_RE.search(description)
    return ABILITY_ABBREV[m.group(1).lower()] if m else ""


SPELL_KEYS = ("casting time", "range", "components", "duration", "materials", "classes")


def parse_spell(text: str) -> SpellRecord:
    lines = _lines(text)
    header = lines[1] if len(lines) > 1 else ""
    kv = _key_values(lines)

    level = 0
    if "cantrip" not in header.lower():
        m = SPELL_LEVEL_RE.search(header)
        level = int(m.group(1) or m.group(2)) if m else 0

    components = kv.get("components", "")
    materials = kv.get("materials", "")
    if not materials:
        m = re.search(r"\(([^)]+)\)", components)
        materials = m.group(1).strip() if m else ""

    body = _description(lines, SPELL_KEYS).split("\n") if len(lines) > 2 else []
    description, higher = [], []
    for line in body:
        m = HIGHER_LEVELS_RE.match(line)
        if m or higher:
            higher.append(m.group(1) if m else line)
        else:
            description.append(line)
    description_text = "\n".join(description)

    return SpellRecord(
        name=lines[0],
        level=level,
        school=_first_of(SCHOOLS, header),
        ritual="ritual" in header.lower(),
        casting_time=kv.get("casting time", ""),
        range=kv.get("range", ""),
        components=components,
        materials=materials,
        duration=kv.get("duration", ""),
        description=description_text,
        higher_levels=" ".join(higher).strip(),
        damage=damage_parts(" ".join(body)),
        save_ability=save_ability(description_text),
    )


def _price(lines: list[str]) -> Optional[float]:
    for line in lines:
        m = PRICE_RE.search(line)
        if m:
            return float(m.group(1).replace(",", "")) / PRICE_DIVISORS[m.group(2).lower()]
    return None


def _weight(lines: list[str]) -> Optional[float]:
    for line in lines:
        m = WEIGHT_RE.search(line)
        if m:
            return float(m.group(1))
    return None


def parse_item(text: str) -> ItemRecord:
    lines = _lines(text)
    header = lines[1] if len(lines) > 1 else ""
    subtype = re.search(r"\(([^)]+)\)", ATTUNEMENT_RE.sub("", header))
    attunement = ATTUNEMENT_RE.search(header)
    body = lines[2:]
    properties = [p for p in WEAPON_PROPERTIES if any(re.search(rf"\b{p}\b", ln, re.IGNORECASE) for ln in body)]

    return ItemRecord(
        name=lines[0],
        item_type=_first_of(ITEM_TYPES, header),
        subtype=subtype.group(1).strip() if subtype else "",
        rarity=_first_of(RARITIES, header),
        attunement=bool(attunement) or "attunement" in header.lower(),
        attunement_requirement=(attunement.group(1) or "").strip() if attunement else "",
        weight=_weight(lines),
        price=_price(lines),
        properties=properties,
        description="\n".join(body),
    )


def parse_class_feature(text: str) -> ClassFeatureRecord:
    lines = _lines(text)
    header = lines[1] if len(lines) > 1 else ""
    level = FEATURE_LEVEL_RE.search(header)
    class_name = CLASS_NAME_RE.search(header)
    return ClassFeatureRecord(
        name=lines[0],
        class_name=next((g for g in class_name.groups() if g), "").lower() if class_name else "",
        level=int(level.group(1) or level.group(2)) if level else None,
        description="\n".join(lines[2:]),
    )


def parse_feat(text: str) -> FeatRecord:
    lines = _lines(text)
    prerequisite = ""
    for line in lines[1:3]:
        m = PREREQUISITE_RE.search(line)
        if m:
            prerequisite = m.group(1).strip()
            break
    body = [ln for ln in lines[2:] if not (prerequisite and PREREQUISITE_RE.search(ln))]
    return FeatRecord(name=lines[0], prerequisite=prerequisite, description="\n".join(body))


def _csv(value: str) -> list[str]:
    return [v.strip() for v in re.split(r",|\band\b", value) if v.strip() and v.strip().lower() not in ("none", "-")]


BACKGROUND_KEYS = ("skill proficiencies", "tool proficiencies", "languages", "equipment", "feature")


def parse_background(text: str) -> BackgroundRecord:
    lines = _lines(text)
    kv = _key_values(lines)

    feature = None
    for i, line in enumerate(lines):
        m = BACKGROUND_FEATURE_RE.match(line)
        if m:
            # The feature's text runs until the next "Key:" line.
            body = []
            for follow in lines[i + 1:]:
                if KEY_VALUE_RE.match(follow):
                    break
                body.append(follow)
            feature = NamedEntry(name=m.group(1).strip(), description=" ".join(body))
            break

    return BackgroundRecord(
        name=lines[0],
        skill_proficiencies=_csv(kv.get("skill proficiencies", "")),
        tool_proficiencies=_csv(kv.get("tool proficiencies", "")),
        languages=kv.get("languages", ""),
        equipment=kv.get("equipment", ""),
        feature=feature,
        description=_description(lines, BACKGROUND_KEYS),
    )


__all__ = [
    "damage_parts",
    "parse_background",
    "parse_class_feature",
    "parse_feat",
    "parse_item",
    "parse_spell",
    "save_ability",
]
