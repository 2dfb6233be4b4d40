"""Assign each statblock line to a named section with a small explicit state machine.

Statblocks are typeset as a fixed preamble of one-line attributes (in any
order, any of them optional), then an unlabeled list of features, then
explicitly headed action/reaction/legendary sections. The tagger walks the
lines once and tracks which of those three regions it is in:

    PREAMBLE     one-line attributes; a "Title." line opens Features
    ABILITY_RUN  inside the six ability-score lines, grouped as one section
    BODY         named-entry sections; a narrative paragraph goes to Other
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from statscribe.core.statblock.sections import ENTRY_SECTIONS, TOP_LEVEL_SECTIONS, SectionId, match_header


# "Multiattack.", "Keen Smell.", "Fire Breath (Recharge 5-6).", "Wing Attack (Costs 2 Actions)."
_WORD = r"[A-Z0-9][\w'/+-]*"
_MINOR = r"(?:of|the|and|or|a|an|in|on|to|with|from|for|at|by)"
ENTRY_TITLE_RE = re.compile(
    rf"^(?P<name>{_WORD}(?:\s+(?:{_WORD}|{_MINOR}))*(?:\s*\([^)]*\))?)\.(?:\s+|$)(?P<rest>.*)$"
)
# Any short capitalized sentence: narrative/lore text when it is not an entry title.
LOOSE_SENTENCE_RE = re.compile(r"^[A-Z][\w\s]{0,30}\.")

NOTE_MARKER = "*"


class ParseState(Enum):
    PREAMBLE = "preamble"
    ABILITY_RUN = "abilityRun"
    BODY = "body"


@dataclass(frozen=True)
class TaggedLine:
    """One statblock source line and the section it was assigned to."""
    line_number: int
    text: str
    section: Optional[SectionId] = None


SectionMap = dict[SectionId, list[TaggedLine]]


@dataclass
class _Tagger:
    sections: SectionMap
    state: ParseState = ParseState.PREAMBLE
    current: Optional[SectionId] = None
    entries: Optional[SectionId] = None     # last named-entry section, resumed after an Other paragraph

    def open(self, section: SectionId) -> None:
        self.current = section
        self.sections.setdefault(section, [])
        if section in ENTRY_SECTIONS:
            self.entries = section

    def closed(self) -> set[SectionId]:
        """Sections a header may no longer open.

        Those that already own lines, except the ability section during its
        run. Once in the body, every top-level section: a wrapped entry line
        starting with "saves" or "senses" is still entry text.
        """
        closed = set(self.sections)
        if self.state is ParseState.ABILITY_RUN:
            closed.discard(SectionId.ability_scores)
        elif self.state is ParseState.BODY:
            closed |= TOP_LEVEL_SECTIONS
        return closed

    def step(self, line: str, paragraph_start: bool) -> None:
        match = match_header(line, exclude=self.closed())
        is_title = bool(ENTRY_TITLE_RE.match(line))

        if match is SectionId.ability_scores:
            self.state = ParseState.ABILITY_RUN
            self.open(match)
        elif match is not None:
            self.state = ParseState.PREAMBLE if match.is_top_level else ParseState.BODY
            self.open(match)
        elif self.state is not ParseState.BODY and is_title and SectionId.features not in self.sections:
            self.state = ParseState.BODY
            self.open(SectionId.features)
        elif self.state is ParseState.BODY and is_title and self.current is SectionId.other and self.entries:
            self.open(self.entries)
        elif self.state is ParseState.BODY and not is_title and paragraph_start \
                and LOOSE_SENTENCE_RE.match(line):
            self.open(SectionId.other)
        elif self.current is None:
            self.open(SectionId.other)


def tag_lines(lines: list[str], start: int = 0) -> SectionMap:
    """Tag statblock body lines (name line excluded) and group them by section.

    Line numbers count from start. Blank lines and note lines starting
    with an asterisk are skipped without changing the section or state.
    Unlike a pure line-shape tagger, a blank line is remembered: it marks
    the next line as a paragraph start, and only a paragraph-starting loose
    sentence in the body is routed to Other.

    After an Other paragraph the next entry title resumes the last entry
    section, so that section can own more than one line span.
    """
    tagger = _Tagger(sections={})
    paragraph_start = False
    for number, raw in enumerate(lines, start):
        line = raw.strip()
        if not line:
            paragraph_start = True
            continue
        if line.startswith(NOTE_MARKER):
            continue
        tagger.step(line, paragraph_start)
        tagger.sections[tagger.current].append(TaggedLine(number, line, tagger.current))
        paragraph_start = False
    return tagger.sections
