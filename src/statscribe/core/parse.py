"""Source document discovery and reading"""

from pathlib import Path

from statscribe.core.exceptions import DocumentReadError


TEXT_EXTENSIONS = {".txt", ".md", ".markdown"}


def discover_files(path: Path) -> list[Path]:
    """Return sorted .txt/.md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in TEXT_EXTENSIONS else []
    return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in TEXT_EXTENSIONS)


def read_document(path: Path) -> str:
    """Read a source document as UTF-8 text.

    Raises:
        DocumentReadError: the file is missing, unreadable, or not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Cannot read {path}: {e}", source_file=str(path)) from e
