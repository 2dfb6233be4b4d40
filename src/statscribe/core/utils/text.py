"""Input cleanup: typography, inline markdown, and line-shape repairs applied before detection"""

import re
from functools import lru_cache

from markdown_it import MarkdownIt


LIGATURES = {
    "ﬀ": "ff",
    "ﬁ": "fi",
    "ﬂ": "fl",
    "ﬃ": "ffi",
    "ﬄ": "ffl",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "−": "-",      # minus sign, common in printed modifiers
    "–": "-",
    "\u00a0": " ",   # no-break space
}

RULE_LINE_RE = re.compile(r'^[\s*_-]+$')
BLOCK_PREFIX_RE = re.compile(r'^\s*(?:>\s*)*(?:#{1,6}\s+|[-+]\s+(?=\S))?')

# A header printed alone on its line with the value on the next one.
SPLIT_HEADER_RE = re.compile(
    r'^(Armor Class|Hit Points|Speed|Saving Throws|Skills|Damage Vulnerabilities|Damage Resistances|'
    r'Damage Immunities|Condition Immunities|Immunities|Senses|Languages|Challenge|Gear|'
    r'Proficiency Bonus|Initiative)[ \t]*\n[ \t]*(?=\S)',
    re.IGNORECASE | re.MULTILINE,
)

ABILITY_HEADER_RE = re.compile(r'^\|?\s*STR\s*\|\s*DEX\s*\|\s*CON\s*\|\s*INT\s*\|\s*WIS\s*\|\s*CHA\s*\|?\s*$', re.IGNORECASE)
TABLE_RULE_RE = re.compile(r'^\|?\s*:?-{3,}:?\s*(?:\|\s*:?-{3,}:?\s*)*\|?\s*$')
ABILITY_ROW_HEADER_RE = re.compile(r'^\s*STR\s+DEX\s+CON\s+INT\s+WIS\s+CHA\s*$', re.IGNORECASE)
ABILITY_VALUE_RE = re.compile(r'\d+\s*\(\s*[+-]?\d+\s*\)')
ABILITY_NAMES = ("STR", "DEX", "CON", "INT", "WIS", "CHA")


@lru_cache(maxsize=1)
def _inline_parser() -> MarkdownIt:
    """Shared MarkdownIt instance; only used read-only for inline parsing."""
    return MarkdownIt("commonmark", options_update={"linkify": False, "html": True})


def normalize_typography(text: str) -> str:
    """Replace ligatures, curly quotes, and typographic dashes with ASCII equivalents."""
    for char, repl in LIGATURES.items():
        text = text.replace(char, repl)
    return text


def strip_inline_markdown(line: str) -> str:
    """Render a single line's inline markdown (emphasis, code, links, images) as plain text."""
    if RULE_LINE_RE.match(line) or not any(c in line for c in "*_`[!<\\&"):
        return line
    tokens = _inline_parser().parseInline(line)
    parts: list[str] = []
    for tok in tokens:
        for child in tok.children or []:
            if child.type in ("text", "code_inline"):
                parts.append(child.content)
            elif child.type == "image":
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append(" ")
    return "".join(parts)


def _collapse_ability_tables(lines: list[str]) -> list[str]:
    """Turn a STR..CHA pipe table or a bare STR..CHA header row plus its values row into one
    'STR 8 (-1) DEX ...' line.
    """
    out: list[str] = []
    i = 0
    while i < len(lines):
        if ABILITY_HEADER_RE.match(lines[i]):
            j = i + 1
            if j < len(lines) and TABLE_RULE_RE.match(lines[j]):
                j += 1
            if j < len(lines):
                cells = [c.strip() for c in lines[j].strip().strip("|").split("|")]
                if len(cells) == 6 and all(cells):
                    out.append(" ".join(f"{name} {cell}" for name, cell in zip(ABILITY_NAMES, cells)))
                    i = j + 1
                    continue
        elif ABILITY_ROW_HEADER_RE.match(lines[i]) and i + 1 < len(lines):
            values = ABILITY_VALUE_RE.findall(lines[i + 1])
            if len(values) == 6:
                out.append(" ".join(f"{name} {value}" for name, value in zip(ABILITY_NAMES, values)))
                i += 2
                continue
        out.append(lines[i])
        i += 1
    return out


def clean_text(text: str) -> str:
    """Normalize raw pasted or extracted text into plain, line-oriented stat-block text.

    Blank lines are preserved so separator detection downstream still sees them.
    """
    text = normalize_typography(text.replace("\r\n", "\n").replace("\r", "\n"))
    lines = [BLOCK_PREFIX_RE.sub("", ln).rstrip() for ln in text.split("\n")]
    lines = _collapse_ability_tables(lines)
    lines = [strip_inline_markdown(ln) for ln in lines]
    return SPLIT_HEADER_RE.sub(lambda m: m.group(1) + " ", "\n".join(lines))
