"""Tests for the CSV and JSON output writers."""

import csv
import json
from pathlib import Path

from txcontext.types import ExtractionResult
from txcontext.writers import CsvWriter, JsonWriter
from txcontext.writers.csv_writer import CSV_HEADERS

RESULTS = [
    ExtractionResult(
        key="settings.title",
        text="Settings",
        description="Title of the settings screen.",
        ui_element="title",
        tone="neutral",
        max_length=20,
        locations=("App/Settings.swift:12", "App/Menu.swift:3"),
    ),
    ExtractionResult(key="alpha.unused", text="Unused, \"quoted\"", description="No usage found in source code"),
    ExtractionResult(key="profile.save", text="Save", description="API request failed", error="timeout"),
]


def test_csv_writer(tmp_path: Path) -> None:
    """Rows are sorted by key, locations joined with ';' and empty fields blank."""
    path = tmp_path / "nested" / "context.csv"
    CsvWriter().write(RESULTS, path)

    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        assert tuple(reader.fieldnames) == CSV_HEADERS
        rows = list(reader)

    assert [r["key"] for r in rows] == ["alpha.unused", "profile.save", "settings.title"]
    assert rows[0]["text"] == 'Unused, "quoted"'
    assert rows[0]["ui_element"] == ""
    assert rows[0]["max_length"] == ""
    assert rows[1]["error"] == "timeout"
    assert rows[2]["locations"] == "App/Settings.swift:12;App/Menu.swift:3"
    assert rows[2]["max_length"] == "20"


def test_json_writer(tmp_path: Path) -> None:
    """The document carries metadata and entries sorted by key."""
    path = tmp_path / "context.json"
    JsonWriter(version="1.2.3").write(RESULTS, path)

    document = json.loads(path.read_text(encoding="utf-8"))

    assert document["version"] == "1.2.3"
    assert document["total"] == 3
    assert "generated_at" in document
    entries = document["entries"]
    assert [e["key"] for e in entries] == ["alpha.unused", "profile.save", "settings.title"]
    assert entries[2]["context"] == {
        "description": "Title of the settings screen.",
        "ui_element": "title",
        "tone": "neutral",
        "max_length": 20,
    }
    assert entries[2]["locations"] == ["App/Settings.swift:12", "App/Menu.swift:3"]
    assert entries[1]["error"] == "timeout"
    assert entries[0]["context"]["ui_element"] is None


def test_writers_replace_previous_output(tmp_path: Path) -> None:
    """Each run rewrites the file from scratch."""
    path = tmp_path / "context.csv"
    CsvWriter().write(RESULTS, path)
    CsvWriter().write(RESULTS[:1], path)

    with path.open(encoding="utf-8", newline="") as f:
        assert len(list(csv.DictReader(f))) == 1
