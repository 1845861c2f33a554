"""A reporter for generating concise execution summaries."""

import logging

from txcontext.match_state import NO_USAGE_DESCRIPTION
from txcontext.models import ExecutionContext

__all__ = ["SummaryReporter"]

logger = logging.getLogger(__name__)


class SummaryReporter:
    """Generates a concise summary of an extraction run and logs it."""

    def generate(self, context: ExecutionContext) -> None:
        """Log a summary of the run to the console."""
        if context.is_finished:
            return

        results = context.results
        no_usage = sum(1 for r in results if r.description == NO_USAGE_DESCRIPTION)
        logger.info("--- Extraction Summary ---")
        logger.info("Wrote %d results to %s", len(results), context.config.output_path)
        logger.info("  - With context: %d", len(results) - no_usage - len(context.errors))
        logger.info("  - No usage found: %d", no_usage)
        for path in context.updated_files:
            logger.info("Updated %s with context comments", path)
        if context.errors:
            logger.info("Errors: %d", len(context.errors))
            for result in sorted(context.errors, key=lambda r: r.key):
                logger.debug("  - %s: %s", result.key, result.error)
        logger.info("--------------------------")
