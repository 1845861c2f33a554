"""Enumerates candidate source files for usage search."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .globs import GlobMatcher
from .patterns import PLATFORM_EXTENSIONS, Platform

__all__ = ["discover_files", "is_ignored"]

logger = logging.getLogger(__name__)


def is_ignored(relative_path: Path, matchers: Iterable[GlobMatcher]) -> bool:
    """Return True if the root-relative path matches any ignore matcher."""
    return any(matcher.matches(relative_path) for matcher in matchers)


def _walk_root(root: Path, matchers: list[GlobMatcher], extensions: frozenset[str]) -> Iterable[Path]:
    """Yield matching files under a directory root in a stable, sorted order."""
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        # Prune ignored directories in place so os.walk never descends into them.
        dirnames[:] = sorted(d for d in dirnames if not is_ignored((current / d).relative_to(root), matchers))
        for filename in sorted(filenames):
            file_path = current / filename
            if file_path.suffix.lower() not in extensions:
                continue
            if is_ignored(file_path.relative_to(root), matchers):
                continue
            yield file_path


def discover_files(
    source_paths: Iterable[str | Path],
    ignore_matchers: list[GlobMatcher],
    platform: Platform,
) -> list[Path]:
    """
    Find all source files to search for a platform.

    Args:
        source_paths: Directories or files to search, in priority order.
        ignore_matchers: Compiled ignore globs, tested against root-relative paths.
        platform: The platform whose file extensions are accepted.

    Returns:
        A de-duplicated list of file paths in discovery order.

    """
    extensions = PLATFORM_EXTENSIONS[platform]
    seen: set[Path] = set()
    files: list[Path] = []

    for raw_path in source_paths:
        root = Path(raw_path)
        if root.is_file():
            candidates: Iterable[Path] = [root] if root.suffix.lower() in extensions else []
        elif root.is_dir():
            candidates = _walk_root(root, ignore_matchers, extensions)
        else:
            logger.warning("Source path does not exist: %s", root)
            continue

        for file_path in candidates:
            try:
                resolved = file_path.resolve()
            except OSError:
                logger.debug("Could not resolve %s, skipping.", file_path)
                continue
            if resolved in seen:
                continue
            seen.add(resolved)
            files.append(file_path)

    logger.debug("Discovered %d candidate source files for platform '%s'.", len(files), platform.value)
    return files
