"""Unit tests for core/parse.py"""

import pytest

from statscribe.core.exceptions import DocumentReadError
from statscribe.core.parse import discover_files, read_document


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a text file path."""
    f = tmp_path / "bestiary.txt"
    f.write_text("Goblin")
    assert discover_files(f) == [f]


def test_discover_files_skips_other_extensions(tmp_path):
    (tmp_path / "scan.pdf").write_bytes(b"%PDF")
    assert discover_files(tmp_path) == []
    assert discover_files(tmp_path / "scan.pdf") == []


def test_discover_files_dir_recursive_sorted(tmp_path):
    (tmp_path / "b.md").write_text("b")
    sub = tmp_path / "a"
    sub.mkdir()
    (sub / "c.txt").write_text("c")
    assert discover_files(tmp_path) == [sub / "c.txt", tmp_path / "b.md"]


def test_read_document(tmp_path):
    f = tmp_path / "doc.txt"
    f.write_text("Owlbear\n", encoding="utf-8")
    assert read_document(f) == "Owlbear\n"


def test_read_document_missing_file(tmp_path):
    with pytest.raises(DocumentReadError) as exc:
        read_document(tmp_path / "missing.txt")
    assert exc.value.details["source_file"].endswith("missing.txt")


def test_read_document_not_utf8(tmp_path):
    f = tmp_path / "latin.txt"
    f.write_bytes(b"caf\xe9")
    with pytest.raises(DocumentReadError, match="Cannot read"):
        read_document(f)
