"""Split a raw document text stream into candidate content blocks"""

import re

from statscribe.core.detect.patterns import (
    BACKGROUND_SIGNATURE,
    CLASS_FEATURE_SIGNATURE,
    FEAT_SIGNATURE,
    ITEM_SIGNATURE,
    MONSTER_SIGNATURE,
    SPELL_SIGNATURE,
)


SEPARATOR = "\x1e"      # ASCII record separator; never present in extracted text

SEPARATOR_PATTERNS = [
    re.compile(r'\n{3,}'),                  # runs of two or more blank lines
    re.compile(r'\n[ \t]*[-_]{3,}[ \t]*\n'),  # horizontal rules
    re.compile(r'\n[ \t]*\d+[ \t]*\n'),     # standalone page numbers
    re.compile(r'\n[ \t]*•[ \t]*\n'),       # standalone bullets
]

TITLE_CASE_RE = re.compile(
    r"^[A-Z][\w'’-]*(?:\s+(?:[A-Z][\w'’-]*|of|the|and|or|a|an|in|on|to|with|from)){0,4}$"
)
ALL_CAPS_RE = re.compile(r"^[A-Z][A-Z'’\s-]*[A-Z]$")

SIGNATURES = (
    SPELL_SIGNATURE,
    ITEM_SIGNATURE,
    MONSTER_SIGNATURE,
    CLASS_FEATURE_SIGNATURE,
    FEAT_SIGNATURE,
    BACKGROUND_SIGNATURE,
)


def _normalize_separators(text: str) -> str:
    """Replace every known separator shape with the canonical separator token."""
    text = "\n" + text.replace("\r\n", "\n").replace("\r", "\n") + "\n"
    for pattern in SEPARATOR_PATTERNS:
        # Separators can share a newline with their neighbour; repeat until stable.
        prev = None
        while prev != text:
            prev = text
            text = pattern.sub(f"\n{SEPARATOR}\n", text)
    return text


def looks_like_title(line: str) -> bool:
    """True if line has the shape of an entry name (1-5 capitalized words or an all-caps phrase)."""
    return bool(TITLE_CASE_RE.match(line) or ALL_CAPS_RE.match(line))


def has_signature(lines: list[str]) -> bool:
    """True if a genre-defining signature line comes before any other title-shaped line.

    A nearer title owns the signature: "Actions" followed by the next entry's
    name and type line must not split there.
    """
    for ln in lines:
        line = ln.strip()
        if any(sig.match(line) for sig in SIGNATURES):
            return True
        if looks_like_title(line):
            return False
    return False


def _refine(chunk: str, lookahead: int, min_lines: int) -> list[str]:
    """Re-scan a chunk for title lines that start a new entry without a separator."""
    blocks: list[str] = []
    current: list[str] = []
    start = 0
    lines = chunk.split("\n")

    for i, raw in enumerate(lines):
        line = raw.strip()
        # A title only commits a split when a signature follows inside the lookahead window.
        if (i > start + min_lines and looks_like_title(line)
                and has_signature([ln for ln in lines[i + 1:i + 1 + lookahead] if ln.strip()])):
            if "\n".join(current).strip():
                blocks.append("\n".join(current).strip())
            current = [line]
            start = i
        else:
            current.append(line)

    if "\n".join(current).strip():
        blocks.append("\n".join(current).strip())
    return blocks


def split_blocks(
    text: str,
    min_chars: int = 10,
    lookahead: int = 3,
    min_lines: int = 3,
    ) -> list[str]:
    """Split document text into ordered candidate block strings, dropping noise blocks."""
    chunks = _normalize_separators(text).split(SEPARATOR)
    blocks = []
    for chunk in chunks:
        if not chunk.strip():
            continue
        blocks.extend(b for b in _refine(chunk, lookahead, min_lines) if len(b) >= min_chars)
    return blocks
