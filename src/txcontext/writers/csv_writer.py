"""Writes extraction results as CSV."""

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from txcontext.types import ExtractionResult

__all__ = ["CSV_HEADERS", "CsvWriter"]

logger = logging.getLogger(__name__)

CSV_HEADERS: Final[tuple[str, ...]] = ("key", "text", "description", "ui_element", "tone", "max_length", "locations", "error")


class CsvWriter:
    """Writes one row per result, sorted by key."""

    def write(self, results: Iterable[ExtractionResult], path: Path) -> None:
        """Write the results to a CSV file, replacing any previous content."""
        rows = sorted(results, key=lambda r: r.key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADERS)
            for result in rows:
                writer.writerow(
                    [
                        result.key,
                        result.text,
                        result.description,
                        result.ui_element or "",
                        result.tone or "",
                        "" if result.max_length is None else result.max_length,
                        ";".join(result.locations),
                        result.error or "",
                    ]
                )
        logger.debug("Wrote %d CSV rows to %s", len(rows), path)
