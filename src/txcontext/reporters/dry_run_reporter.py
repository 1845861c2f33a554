"""A reporter that lists what a dry run would process."""

import logging
from typing import Final

from txcontext.models import ExecutionContext
from txcontext.utils.text import truncate

__all__ = ["DryRunReporter"]

logger = logging.getLogger(__name__)

PREVIEW_LIMIT: Final[int] = 20
TEXT_PREVIEW_LENGTH: Final[int] = 50


class DryRunReporter:
    """Logs the first keys of a dry run with a short preview of their text."""

    def generate(self, context: ExecutionContext) -> None:
        """Log the keys that would be sent for extraction."""
        if context.is_finished:
            return

        entries = context.entries
        logger.info("Dry run - would process these keys:")
        for entry in entries[:PREVIEW_LIMIT]:
            logger.info("  - %s: %s", entry.key, truncate(entry.text, TEXT_PREVIEW_LENGTH))
        if len(entries) > PREVIEW_LIMIT:
            logger.info("  ... and %d more", len(entries) - PREVIEW_LIMIT)
