"""Phase 2: narrow the entries down by key pattern and by git diff."""

import logging

import regex

from txcontext.git_diff import GitDiff
from txcontext.models import ExecutionContext
from txcontext.types import TranslationEntry

from .base import Processor

__all__ = ["FilterProcessor", "compile_key_filter"]

logger = logging.getLogger(__name__)


def compile_key_filter(key_filter: str) -> list[regex.Pattern]:
    """
    Compile a comma-separated key filter.

    Each item matches whole keys; '*' matches any run of characters, and
    everything else is literal. 'settings.*' matches 'settings.title'.
    """
    patterns = []
    for item in key_filter.split(","):
        item = item.strip()
        if not item:
            continue
        body = ".*".join(regex.escape(part) for part in item.split("*"))
        patterns.append(regex.compile(f"^{body}$"))
    return patterns


def filter_by_keys(entries: list[TranslationEntry], key_filter: str) -> list[TranslationEntry]:
    """Keep the entries whose key matches any filter item."""
    patterns = compile_key_filter(key_filter)
    if not patterns:
        return entries
    return [entry for entry in entries if any(p.match(entry.key) for p in patterns)]


class FilterProcessor(Processor):
    """Applies the --keys filter and the --diff-base filter, in that order."""

    def process(self, context: ExecutionContext) -> None:
        """Filter the loaded entries in place."""
        config = context.config
        entries = context.entries

        if config.key_filter:
            entries = filter_by_keys(entries, config.key_filter)
            logger.debug("Key filter '%s' kept %d of %d entries.", config.key_filter, len(entries), len(context.entries))

        if config.diff_base:
            if context.changed_keys is None:
                context.changed_keys = GitDiff(base_ref=config.diff_base).changed_keys(config.translations)
            if not context.changed_keys:
                logger.info("No changes detected in translation files since %s", config.diff_base)
                entries = []
            else:
                logger.info("Found %d changed keys in git diff", len(context.changed_keys))
                entries = [entry for entry in entries if entry.key in context.changed_keys]

        context.entries = entries
        if not entries:
            if config.diff_base:
                logger.info("No changed translation keys found since %s.", config.diff_base)
            else:
                logger.info("No translation entries found.")
            context.is_finished = True
            return

        logger.info("Loaded %d translation keys", len(entries))
        if config.diff_base:
            logger.info("(filtered to changes since %s)", config.diff_base)
