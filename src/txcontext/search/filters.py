"""Removes duplicate and false-positive usage matches."""

import logging
from collections.abc import Iterable
from pathlib import Path, PurePath
from typing import Final

import regex

from txcontext.types import Match

__all__ = ["FALSE_POSITIVE_PATTERNS", "filter_matches", "is_false_positive", "is_translation_file"]

logger = logging.getLogger(__name__)

# Line shapes that resemble key usage but are not localization calls. They
# look only at the shape of the line, never at the key itself.
FALSE_POSITIVE_PATTERNS: Final[tuple[regex.Pattern, ...]] = (
    regex.compile(r"\.\w+\(\s*\)"),  # empty-argument method calls such as .apply(), .clear()
    regex.compile(r"==\s*[\"']"),  # key == "yes"
    regex.compile(r"[\"']\s*=="),  # "yes" == key
    regex.compile(r"!=\s*[\"']"),  # key != "no"
    regex.compile(r"[\"']\s*!="),  # "no" != key
    regex.compile(r"\.equals\(\s*[\"']"),  # Java .equals("...")
    regex.compile(r"contentEquals\(\s*[\"']"),  # Kotlin contentEquals("...")
)

_TRANSLATION_SUFFIXES: Final[frozenset[str]] = frozenset({".strings", ".stringsdict"})


def is_false_positive(line: str) -> bool:
    """Return True if the matched line has the shape of a known false positive."""
    if not line:
        return False
    return any(pattern.search(line) for pattern in FALSE_POSITIVE_PATTERNS)


def is_translation_file(file: str | PurePath, translation_paths: Iterable[Path] = ()) -> bool:
    """
    Return True if the file defines translations rather than using them.

    Args:
        file: The file to check.
        translation_paths: Resolved paths of the configured translation files.

    """
    path = PurePath(file)
    suffix = path.suffix.lower()
    if suffix in _TRANSLATION_SUFFIXES:
        return True
    if path.name.lower() == "strings.xml":
        return True
    if suffix == ".xml" and path.parent.name.startswith("values") and path.parent.parent.name == "res":
        return True
    if translation_paths:
        try:
            return Path(file).resolve() in translation_paths
        except OSError:
            return False
    return False


def filter_matches(matches: Iterable[Match], translation_paths: Iterable[Path] = ()) -> list[Match]:
    """
    Deduplicate matches and drop false positives and definition-file hits.

    The steps run in order: deduplicate by (file, line) keeping the first
    occurrence, drop lines shaped like false positives, then drop matches
    located in translation-definition files.

    Returns:
        The surviving matches in their original order.

    """
    seen: set[tuple[str, int]] = set()
    unique: list[Match] = []
    for match in matches:
        location = (match.file, match.line)
        if location in seen:
            continue
        seen.add(location)
        unique.append(match)

    resolved_translations = frozenset(translation_paths)
    filtered = [m for m in unique if not is_false_positive(m.match_line) and not is_translation_file(m.file, resolved_translations)]

    if len(filtered) != len(unique):
        logger.debug("Filtered %d of %d matches as false positives or definitions.", len(unique) - len(filtered), len(unique))
    return filtered
