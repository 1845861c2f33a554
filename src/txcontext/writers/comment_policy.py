"""
Comment resolution shared by every write-back engine.

Given the text of an existing comment and a new description, decide what
the comment should say. Two settings drive it: a prefix that marks the
context fragment, and a mode of 'replace' or 'append'.
"""

from collections.abc import Mapping
from typing import Final, Literal

import regex

from txcontext.match_state import SENTINEL_MARKERS
from txcontext.types import ExtractionResult

__all__ = ["ContextMode", "build_comment", "is_sentinel_description", "writable_results"]

ContextMode = Literal["replace", "append"]

REPLACE: Final[str] = "replace"
APPEND: Final[str] = "append"


def is_sentinel_description(description: str | None) -> bool:
    """Return True for empty descriptions and for the no-usage and failure sentinels."""
    if not description:
        return True
    return any(marker in description for marker in SENTINEL_MARKERS)


def writable_results(results_by_key: Mapping[str, ExtractionResult]) -> dict[str, ExtractionResult]:
    """Keep only the results whose description may be written into files. Failed results never are."""
    return {
        key: result
        for key, result in results_by_key.items()
        if not result.error and not is_sentinel_description(result.description)
    }


def build_comment(existing: str | None, description: str, prefix: str, mode: str, separator: str = " ") -> str:
    """
    Resolve the new comment text.

    Args:
        existing: The current comment text, without comment delimiters.
        description: The new context description, already escaped for the target format.
        prefix: Marker placed in front of the description, e.g. 'Context: '. May be empty.
        mode: 'replace' overwrites the whole comment; 'append' keeps other content.
        separator: Placed between existing content and an appended context line.

    Returns:
        The comment text to write.

    """
    context_line = f"{prefix}{description}"

    if not existing or not existing.strip():
        return context_line
    if mode == REPLACE:
        return context_line
    if prefix and prefix in existing:
        pattern = regex.compile(regex.escape(prefix) + r"[^\n]*")
        return pattern.sub(lambda _m: context_line, existing)
    if context_line in existing:
        return existing
    return f"{existing}{separator}{context_line}"
