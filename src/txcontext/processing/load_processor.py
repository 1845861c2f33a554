"""Phase 1: read translation entries from the configured files."""

import logging
from pathlib import Path

from txcontext.models import ExecutionContext
from txcontext.parsers import parser_for

from .base import Processor

__all__ = ["LoadProcessor"]

logger = logging.getLogger(__name__)


class LoadProcessor(Processor):
    """Parses every configured translation file into entries."""

    def process(self, context: ExecutionContext) -> None:
        """
        Load all entries into the context.

        Missing files are reported and skipped. An unsupported format raises
        UnsupportedFormatError, which aborts the run.
        """
        entries = []
        for raw_path in context.config.translations:
            path = Path(raw_path)
            if not path.is_file():
                logger.warning("Translation file not found: %s", path)
                continue

            parser = parser_for(path)
            file_entries = parser.parse(path)
            logger.debug("Loaded %d entries from %s with %s", len(file_entries), path, parser.__class__.__name__)
            entries.extend(file_entries)

        context.entries = entries
