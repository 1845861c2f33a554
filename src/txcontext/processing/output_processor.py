"""Phase 4: write the results to the configured CSV or JSON file."""

import logging
from pathlib import Path

from txcontext.models import ExecutionContext
from txcontext.writers import CsvWriter, JsonWriter

from .base import Processor

__all__ = ["OutputProcessor"]

logger = logging.getLogger(__name__)


class OutputProcessor(Processor):
    """Serializes all results, sorted by key."""

    def process(self, context: ExecutionContext) -> None:
        """Write the output file."""
        if context.is_finished or context.is_dry_run:
            return

        config = context.config
        output_path = Path(config.output_path)
        writer = JsonWriter(version=context.version) if config.output_format == "json" else CsvWriter()
        writer.write(context.results, output_path)
        logger.debug("Wrote %s output to %s", config.output_format, output_path)
