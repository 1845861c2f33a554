"""Finds usages of translation keys in application source code."""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from txcontext.types import Match

from .discovery import discover_files
from .filters import filter_matches
from .globs import compile_globs
from .patterns import Platform, build_search_patterns, compile_patterns, detect_platform
from .scanner import scan_file

__all__ = ["Searcher"]

logger = logging.getLogger(__name__)


class Searcher:
    """
    A search session over a fixed set of source roots.

    File discovery runs once, on the first search, and the resulting file list
    is reused for every key searched through this instance. A Searcher may be
    shared between worker threads.
    """

    def __init__(
        self,
        source_paths: Iterable[str | Path],
        ignore_patterns: Iterable[str] = (),
        context_lines: int = 20,
        platform: Platform | str | None = None,
        translation_paths: Iterable[str | Path] = (),
    ) -> None:
        """
        Initialize the search session.

        Args:
            source_paths: Directories or files to search.
            ignore_patterns: Glob patterns of paths to skip.
            context_lines: Radius of the context window around each match.
            platform: Platform override. Detected from the source roots when None.
            translation_paths: Translation files, never reported as usages.

        """
        self.source_paths = [Path(p) for p in source_paths]
        self.ignore_matchers = compile_globs(list(ignore_patterns))
        self.context_lines = context_lines
        self.platform = Platform(platform) if platform else detect_platform(self.source_paths)
        self.translation_paths = frozenset(Path(p).resolve() for p in translation_paths)
        self._files: list[Path] | None = None
        self._files_lock = threading.Lock()
        logger.debug("Searcher initialized for platform '%s' over %d source paths.", self.platform.value, len(self.source_paths))

    @property
    def files(self) -> list[Path]:
        """Return the candidate source files, discovering them on first access."""
        if self._files is None:
            with self._files_lock:
                if self._files is None:
                    self._files = discover_files(self.source_paths, self.ignore_matchers, self.platform)
                    logger.info("Searching %d source files (platform: %s).", len(self._files), self.platform.value)
        return self._files

    def search(self, key: str) -> list[Match]:
        """
        Find usages of a key.

        Files that raise unexpected I/O errors while being scanned are logged
        and left out; the search itself does not fail.

        Args:
            key: The translation key.

        Returns:
            Filtered matches in discovery order.

        """
        patterns = compile_patterns(build_search_patterns(key, self.platform))
        if not patterns:
            return []

        all_matches: list[Match] = []
        for file_path in self.files:
            try:
                all_matches.extend(scan_file(file_path, patterns, key, self.context_lines))
            except OSError as e:
                logger.warning("Could not scan %s for key '%s': %s", file_path, key, e)

        matches = filter_matches(all_matches, self.translation_paths)
        logger.debug("Key '%s': %d matches after filtering.", key, len(matches))
        return matches
