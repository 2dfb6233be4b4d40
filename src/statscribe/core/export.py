"""Export: write parsed records as JSON or YAML files plus a build manifest"""

import json
from pathlib import Path

import yaml

from statscribe.core.models import DocumentResult, ParsedBlock
from statscribe.core.utils.slug import unique_slug


MANIFEST_FILE = "manifest.json"


def render_record(parsed: ParsedBlock, fmt: str = "json") -> str:
    """Serialize one record; YAML keeps field order so files read like the source statblock."""
    data = parsed.record.model_dump(mode="json")
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def build_manifest(documents: list[DocumentResult], entries: list[dict]) -> dict:
    """Build the manifest dict: per-document counts and one entry per written record."""
    return {
        "documents": [
            {
                "source": doc.source,
                "records": len(doc.records),
                "failures": [f.model_dump(mode="json") for f in doc.failures],
                "skipped": doc.skipped,
            }
            for doc in documents
        ],
        "records": entries,
    }


def write_records(
    documents: list[DocumentResult],
    output_dir: Path,
    fmt: str = "json",
    ) -> list[tuple[str, Path]]:
    """Write every record to output_dir/<kind>/<slug>.<fmt> and a manifest.json beside them.

    Slugs are unique per kind; repeated names get -2, -3, ... suffixes.
    Returns (record name, file path) pairs in document order.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    taken: dict[str, set[str]] = {}
    written: list[tuple[str, Path]] = []
    entries: list[dict] = []

    for doc in documents:
        for parsed in doc.records:
            kind = parsed.kind.value
            slug = unique_slug(parsed.record.name, taken.setdefault(kind, set()))
            dest_dir = output_dir / kind
            dest_dir.mkdir(parents=True, exist_ok=True)
            path = dest_dir / f"{slug}.{fmt}"
            path.write_text(render_record(parsed, fmt), encoding="utf-8")
            written.append((parsed.record.name, path))
            entries.append({
                "name": parsed.record.name,
                "kind": kind,
                "source": doc.source,
                "path": path.relative_to(output_dir).as_posix(),
                "diagnostics": [d.model_dump(mode="json") for d in parsed.diagnostics],
            })

    (output_dir / MANIFEST_FILE).write_text(
        json.dumps(build_manifest(documents, entries), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return written
