"""Unit tests for core/export.py"""

import json

import yaml

from statscribe.core.export import MANIFEST_FILE, render_record, write_records
from statscribe.core.models import BlockFailure, ContentKind, DocumentResult, ParsedBlock
from statscribe.core.statblock.assemble import parse_statblock


def _document(goblin_text, copies=1, failures=()):
    goblin = ParsedBlock(kind=ContentKind.monster, record=parse_statblock(goblin_text))
    return DocumentResult(source="bestiary.txt", records=[goblin] * copies, failures=list(failures), skipped=2)


def test_render_record_json(goblin_text):
    parsed = _document(goblin_text).records[0]
    data = json.loads(render_record(parsed, "json"))
    assert data["name"] == "Goblin"
    assert data["challenge"] == {"rating": 0.25, "xp": 50}


def test_render_record_yaml_keeps_field_order(goblin_text):
    parsed = _document(goblin_text).records[0]
    text = render_record(parsed, "yaml")
    assert text.startswith("name: Goblin\n")
    assert yaml.safe_load(text)["armor_class"] == {"value": 15, "formula": "leather armor, shield"}


def test_write_records_layout(tmp_path, goblin_text):
    """Records land under <kind>/<slug>.<fmt>; repeated names get numbered slugs."""
    written = write_records([_document(goblin_text, copies=2)], tmp_path, "json")
    assert [p.relative_to(tmp_path).as_posix() for _, p in written] == ["monster/goblin.json", "monster/goblin-2.json"]


def test_write_records_manifest(tmp_path, goblin_text):
    failure = BlockFailure(index=3, kind=ContentKind.spell, error="No content to parse")
    write_records([_document(goblin_text, failures=[failure])], tmp_path, "yaml")
    manifest = json.loads((tmp_path / MANIFEST_FILE).read_text())
    assert manifest["documents"] == [{
        "source": "bestiary.txt",
        "records": 1,
        "failures": [{"index": 3, "kind": "spell", "error": "No content to parse"}],
        "skipped": 2,
    }]
    assert manifest["records"][0]["path"] == "monster/goblin.yaml"
    assert manifest["records"][0]["diagnostics"] == []


def test_write_records_empty(tmp_path):
    assert write_records([], tmp_path / "out") == []
    assert json.loads((tmp_path / "out" / MANIFEST_FILE).read_text()) == {"documents": [], "records": []}
