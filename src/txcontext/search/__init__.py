"""
Key-to-usage search engine.

Turns a translation key into source-code matches: platform patterns are
generated, candidate files are discovered once per session, each file is
scanned line by line, and the raw matches are filtered.
"""

from .globs import GlobMatcher, compile_glob, compile_globs
from .patterns import Platform, build_search_patterns, detect_platform
from .searcher import Searcher

__all__ = [
    "GlobMatcher",
    "Platform",
    "Searcher",
    "build_search_patterns",
    "compile_glob",
    "compile_globs",
    "detect_platform",
]
