"""Route a classified block to the parser for its kind"""

from typing import Callable

from statscribe.core.extract.entries import (
    parse_background,
    parse_class_feature,
    parse_feat,
    parse_item,
    parse_spell,
)
from statscribe.core.models import ContentBlock, ContentKind, Diagnostic, ParsedBlock, Record
from statscribe.core.statblock.assemble import parse_statblock_with_diagnostics


def _without_diagnostics(parse: Callable[[str], Record]) -> Callable[[str], tuple[Record, list[Diagnostic]]]:
    def run(text: str) -> tuple[Record, list[Diagnostic]]:
        return parse(text), []
    return run


PARSERS: dict[ContentKind, Callable[[str], tuple[Record, list[Diagnostic]]]] = {
    ContentKind.monster:       parse_statblock_with_diagnostics,
    ContentKind.spell:         _without_diagnostics(parse_spell),
    ContentKind.item:          _without_diagnostics(parse_item),
    ContentKind.class_feature: _without_diagnostics(parse_class_feature),
    ContentKind.feat:          _without_diagnostics(parse_feat),
    ContentKind.background:    _without_diagnostics(parse_background),
}


def extract_block(block: ContentBlock) -> ParsedBlock:
    """Parse a classified block into its typed record.

    Raises:
        ValueError: block kind is unknown.
        EmptyInputError: block text has no non-blank lines.
    """
    parser = PARSERS.get(block.kind)
    if parser is None:
        raise ValueError(f"No parser for content kind {block.kind.value!r}")
    record, diagnostics = parser(block.raw_text)
    return ParsedBlock(kind=block.kind, record=record, diagnostics=diagnostics)
