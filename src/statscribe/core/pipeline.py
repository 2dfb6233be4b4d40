"""Pipeline step functions: scan, process, and build orchestration"""

from pathlib import Path

from statscribe.config import Settings
from statscribe.core.detect.classify import classify_block
from statscribe.core.detect.split import split_blocks
from statscribe.core.exceptions import EmptyInputError
from statscribe.core.export import write_records
from statscribe.core.extract.extract import extract_block
from statscribe.core.logging import get_logger
from statscribe.core.models import BlockFailure, ContentBlock, ContentKind, DocumentResult
from statscribe.core.parse import discover_files, read_document
from statscribe.core.utils.hashing import block_fingerprint
from statscribe.core.utils.text import clean_text


logger = get_logger(__name__)


def _detect(
    text: str,
    min_chars: int,
    lookahead: int,
    min_lines: int,
    dedupe: bool,
    ) -> tuple[list[ContentBlock], int]:
    """Clean, split, dedupe, and classify. Returns (recognized blocks, unknown-block count)."""
    seen: set[str] = set()
    blocks: list[ContentBlock] = []
    skipped = 0
    for raw in split_blocks(clean_text(text), min_chars, lookahead, min_lines):
        if dedupe:
            fingerprint = block_fingerprint(raw)
            if fingerprint in seen:
                continue
            seen.add(fingerprint)
        kind = classify_block(raw)
        if kind is ContentKind.unknown:
            skipped += 1
            logger.info("block skipped", reason="unrecognized", title=raw.split("\n", 1)[0][:60])
            continue
        blocks.append(ContentBlock(kind=kind, raw_text=raw))
    logger.debug("blocks detected", recognized=len(blocks), skipped=skipped)
    return blocks, skipped


def scan_text(
    text: str,
    min_chars: int = 10,
    lookahead: int = 3,
    min_lines: int = 3,
    dedupe: bool = True,
    ) -> list[ContentBlock]:
    """Split and classify document text into ordered content blocks; unrecognized blocks are dropped."""
    blocks, _ = _detect(text, min_chars, lookahead, min_lines, dedupe)
    return blocks


def process_text(text: str, source: str = "<text>", **detector) -> DocumentResult:
    """Scan text and parse every recognized block into its record.

    Blocks are independent: an empty block becomes a BlockFailure and its
    siblings still parse. Detector keyword arguments are those of scan_text.
    """
    blocks, skipped = _detect(
        text,
        detector.get("min_chars", 10),
        detector.get("lookahead", 3),
        detector.get("min_lines", 3),
        detector.get("dedupe", True),
    )
    result = DocumentResult(source=source, skipped=skipped)
    for index, block in enumerate(blocks):
        try:
            parsed = extract_block(block)
        except EmptyInputError as e:
            logger.warning("block failed", source=source, index=index, kind=block.kind.value, error=str(e))
            result.failures.append(BlockFailure(index=index, kind=block.kind, error=str(e)))
            continue
        for note in parsed.diagnostics:
            logger.debug("section diagnostic", source=source, index=index, section=note.section, message=note.message)
        result.records.append(parsed)
    return result


def _detector_options(settings: Settings) -> dict:
    return {
        "min_chars": settings.min_block_chars,
        "lookahead": settings.lookahead_lines,
        "min_lines": settings.min_block_lines,
        "dedupe": settings.dedupe_blocks,
    }


def run_scan(path: str, settings: Settings) -> list[tuple[Path, list[ContentBlock], int]]:
    """Scan every document under path. Returns (source_path, blocks, skipped_count) triples.

    Raises:
        DocumentReadError: a discovered file cannot be read.
    """
    results = []
    for p in discover_files(Path(path)):
        blocks, skipped = _detect(read_document(p), **_detector_options(settings))
        results.append((p, blocks, skipped))
    return results


def run_process(path: str, settings: Settings) -> list[DocumentResult]:
    """Process every document under path into a DocumentResult."""
    return [
        process_text(read_document(p), source=str(p), **_detector_options(settings))
        for p in discover_files(Path(path))
    ]


def run_build(path: str, settings: Settings) -> tuple[list[DocumentResult], list[tuple[str, Path]]]:
    """Process documents under path and export their records.

    Returns (document results, (record name, written file) pairs).
    """
    documents = run_process(path, settings)
    written = write_records(documents, Path(settings.output_dir), settings.output_format)
    logger.info("build complete", documents=len(documents), records=len(written))
    return documents, written
