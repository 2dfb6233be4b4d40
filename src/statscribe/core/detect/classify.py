"""Assign a content kind to a candidate block: structural signatures first, keyword heuristics second"""

import re

from statscribe.core.detect.patterns import (
    ABILITY_RE,
    BACKGROUND_SIGNATURE,
    CLASS_FEATURE_SIGNATURE,
    FEAT_SIGNATURE,
    ITEM_SIGNATURE,
    ITEM_TYPE_RE,
    MONSTER_SIGNATURE,
    SCHOOL_RE,
    SPELL_SIGNATURE,
)
from statscribe.core.models import ContentKind


# Tier 1: the line after the title defines the genre. Most specific first.
STRUCTURAL_SIGNATURES: list[tuple[ContentKind, re.Pattern]] = [
    (ContentKind.spell,         SPELL_SIGNATURE),
    (ContentKind.item,          ITEM_SIGNATURE),
    (ContentKind.monster,       MONSTER_SIGNATURE),
    (ContentKind.class_feature, CLASS_FEATURE_SIGNATURE),
    (ContentKind.feat,          FEAT_SIGNATURE),
    (ContentKind.background,    BACKGROUND_SIGNATURE),
]


def _all(*patterns: str):
    """Heuristic that fires only when every pattern occurs somewhere in the block."""
    compiled = [re.compile(p, re.IGNORECASE | re.MULTILINE) for p in patterns]
    return lambda block: all(c.search(block) for c in compiled)


_AC_OR_HP = r"\b(?:armor class|hit points)\s+\d+|^(?:AC|HP)\s+\d+"
_ABILITY_PAIR = rf"\b{ABILITY_RE}\s+\d+\s*\(\s*[+\-−–]?\d+\s*\)"

# Tier 2: keyword co-occurrence across the whole block. Order matters; first hit wins.
KEYWORD_HEURISTICS: list[tuple[ContentKind, object]] = [
    (ContentKind.monster, _all(_AC_OR_HP, _ABILITY_PAIR)),
    (ContentKind.monster, _all(rf"{_ABILITY_PAIR}\s*{_ABILITY_PAIR}")),
    (ContentKind.monster, _all(r"\bchallenge\s+[\d/]+\s*\(\s*[\d,]+\s*xp\s*\)")),
    (ContentKind.spell,   _all(r"\bcasting time\b", r"\brange\b", r"\bduration\b", rf"\b{SCHOOL_RE}\b")),
    (ContentKind.item,    _all(r"\b(?:tool|kit|supplies)\b", r"\b(?:artisan|thieves|herbalism|musical instrument)")),
    (ContentKind.item,    _all(r"\b(?:weapon|sword|axe|bow|crossbow)\b", r"\b(?:damage|attunement|properties)\b")),
    (ContentKind.item,    _all(r"\b(?:armor|shield|plate|mail)\b", r"\battunement\b")),
    (ContentKind.item,    _all(rf"\b{ITEM_TYPE_RE}\b", r"\b(?:requires attunement|rarity)\b")),
    (ContentKind.monster, _all(r"^(?:armor class|hit points|speed)\b", r"^(?:actions|legendary actions|lair actions)$")),
    (ContentKind.background, _all(r"\bbackground\b", r"\b(?:skill proficiencies|feature:|equipment|suggested characteristics)")),
]


def _second_line(block: str) -> str:
    """Return the first non-blank line after the title line, stripped."""
    lines = [ln.strip() for ln in block.splitlines() if ln.strip()]
    return lines[1] if len(lines) > 1 else ""


def classify_block(block: str) -> ContentKind:
    """Classify a candidate block; ContentKind.unknown when nothing matches."""
    second = _second_line(block)
    if second:
        for kind, pattern in STRUCTURAL_SIGNATURES:
            if pattern.match(second):
                return kind

    for kind, heuristic in KEYWORD_HEURISTICS:
        if heuristic(block):
            return kind

    return ContentKind.unknown
