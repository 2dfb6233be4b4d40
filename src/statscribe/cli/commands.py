"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from statscribe.config import CONFIG_FILE, Settings, default_config_yaml, load_config
from statscribe.core.exceptions import StatscribeError
from statscribe.core.logging import configure_logging
from statscribe.core.parse import read_document
from statscribe.core.pipeline import run_build, run_scan
from statscribe.core.statblock.assemble import parse_statblock_with_diagnostics


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    return settings


def scan_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to scan")],
    min_chars: Annotated[Optional[int], typer.Option("--min-chars", help="Discard blocks shorter than this")] = None,
    lookahead: Annotated[Optional[int], typer.Option("--lookahead", help="Lines checked after a title for a signature")] = None,
    ):
    """List detected content blocks (kind and title) and the unrecognized-block count."""
    settings = _settings(overrides={"min_block_chars": min_chars, "lookahead_lines": lookahead})
    try:
        results = run_scan(path, settings)
    except StatscribeError as e:
        _fail("Scan failed", e)
    if not results:
        typer.echo(f"No .txt or .md files found at: {path}")
        raise typer.Exit(1)
    for src, blocks, skipped in results:
        typer.echo(f"{src}")
        for block in blocks:
            typer.echo(f"  {block.kind.value:<13} {block.title}")
        typer.echo(f"  {len(blocks)} block(s), {skipped} skipped")


def parse_cmd(
    file: Annotated[str, typer.Argument(help="Text file holding one monster statblock")],
    ):
    """Parse a file as a single statblock and print the record as JSON."""
    _settings()
    try:
        record, notes = parse_statblock_with_diagnostics(read_document(Path(file)))
    except StatscribeError as e:
        _fail(f"Cannot parse {file}", e)
    typer.echo(record.model_dump_json(indent=2))
    for note in notes:
        typer.echo(f"warning: {note.section}: {note.message}", err=True)


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to process")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Record file format: json or yaml")] = None,
    ):
    """Run the full pipeline: detect -> parse -> export."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt})
    try:
        documents, written = run_build(path, settings)
    except StatscribeError as e:
        _fail("Build failed", e)
    except OSError as e:
        _fail("Export failed", e)

    for doc in documents:
        for failure in doc.failures:
            typer.echo(f"  failed: {doc.source} block {failure.index} ({failure.kind.value}): {failure.error}", err=True)
    for name, dest in written:
        typer.echo(f"  {name} -> {dest}")
    skipped = sum(doc.skipped for doc in documents)
    typer.echo(f"Built {len(written)} record(s) from {len(documents)} document(s), {skipped} block(s) skipped")


def init_cmd(
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config.yaml")] = False,
    ):
    """Write a config.yaml holding the default settings."""
    path = Path(CONFIG_FILE)
    if path.exists() and not force:
        _fail(f"{CONFIG_FILE} already exists. Use --force to overwrite.")
    path.write_text(default_config_yaml())
    typer.echo(f"Wrote default settings to {CONFIG_FILE}")
