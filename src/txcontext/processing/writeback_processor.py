"""Phases 5 and 6: write context comments back into translation files and Swift code."""

import logging
from collections.abc import Iterable
from pathlib import Path

from txcontext.models import ExecutionContext
from txcontext.search.globs import compile_globs
from txcontext.types import ExtractionResult
from txcontext.writers import SwiftWriter, source_writer_for

from .base import Processor

__all__ = ["CodeWriteBackProcessor", "WriteBackProcessor"]

logger = logging.getLogger(__name__)


def _results_by_key(results: Iterable[ExtractionResult]) -> dict[str, ExtractionResult]:
    """Index results by key. With duplicate keys the last result wins."""
    return {result.key: result for result in results}


class WriteBackProcessor(Processor):
    """Updates the comments of .strings and strings.xml translation files."""

    def process(self, context: ExecutionContext) -> None:
        """Write comments into every configured translation file that supports them."""
        config = context.config
        if context.is_finished or context.is_dry_run or not config.write_back:
            return

        results_by_key = _results_by_key(context.results)
        for raw_path in config.translations:
            path = Path(raw_path)
            if not path.is_file():
                continue

            writer = source_writer_for(path, config.context_prefix, config.context_mode)
            if writer is None:
                logger.debug("No write-back support for %s", path)
                continue

            try:
                changed = writer.write(results_by_key, path)
            except OSError:
                logger.exception("Could not write context comments to %s", path)
                continue
            if changed:
                context.updated_files.append(str(path))


class CodeWriteBackProcessor(Processor):
    """Updates the `comment:` arguments of Swift localization calls."""

    def process(self, context: ExecutionContext) -> None:
        """Write comments into every Swift file under the source paths."""
        config = context.config
        if context.is_finished or context.is_dry_run or not config.write_back_to_code:
            return

        writer = SwiftWriter(
            functions=config.swift_functions,
            context_prefix=config.context_prefix,
            context_mode=config.context_mode,
        )
        try:
            updated_count = writer.write_to_source_files(
                _results_by_key(context.results),
                config.source_paths,
                compile_globs(config.ignore_patterns),
            )
        except OSError:
            logger.exception("Could not write context comments to Swift sources")
            return

        if updated_count:
            logger.info("Updated %d Swift files with context comments", updated_count)
