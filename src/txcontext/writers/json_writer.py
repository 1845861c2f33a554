"""Writes extraction results as a JSON document."""

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from txcontext.types import ExtractionResult

__all__ = ["JsonWriter"]

logger = logging.getLogger(__name__)


def _entry(result: ExtractionResult) -> dict[str, Any]:
    return {
        "key": result.key,
        "text": result.text,
        "context": {
            "description": result.description,
            "ui_element": result.ui_element,
            "tone": result.tone,
            "max_length": result.max_length,
        },
        "locations": list(result.locations),
        "error": result.error,
    }


class JsonWriter:
    """Writes `{generated_at, version, total, entries}` with entries sorted by key."""

    def __init__(self, version: str) -> None:
        """
        Initialize the writer.

        Args:
            version: The txcontext version recorded in the document.

        """
        self.version = version

    def write(self, results: Iterable[ExtractionResult], path: Path) -> None:
        """Write the results to a JSON file, replacing any previous content."""
        entries = [_entry(r) for r in sorted(results, key=lambda r: r.key)]
        document = {
            "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "version": self.version,
            "total": len(entries),
            "entries": entries,
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
            f.write("\n")
        logger.debug("Wrote %d JSON entries to %s", len(entries), path)
