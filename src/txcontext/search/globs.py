"""Compiles ignore-glob strings into path matchers."""

from dataclasses import dataclass, field
from pathlib import PurePath

import regex

__all__ = ["GlobMatcher", "compile_glob", "compile_globs", "glob_to_regex"]


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob pattern into an anchored regular expression.

    Supported syntax:
        `**/`   zero or more leading path segments.
        `/**`   at the end, the directory itself and everything below it.
        `**`    anything, across segments.
        `*`     anything within a single segment.
        `?`     exactly one character other than the separator.

    Args:
        pattern: The glob pattern, using '/' as the separator.

    Returns:
        A regular expression string that must match the whole path.

    """
    parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == length:
            parts.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(regex.escape(pattern[i]))
            i += 1
    return "^" + "".join(parts) + "$"


@dataclass(frozen=True)
class GlobMatcher:
    """A compiled glob pattern that tests POSIX-style relative paths."""

    pattern: str
    _compiled: regex.Pattern = field(repr=False, compare=False)
    _basename_only: bool = field(repr=False, compare=False, default=False)

    def matches(self, relative_path: str | PurePath) -> bool:
        """Return True if the path (relative to a source root) matches the glob."""
        path_str = relative_path.as_posix() if isinstance(relative_path, PurePath) else relative_path.replace("\\", "/")
        if path_str.startswith("./"):
            path_str = path_str[2:]
        if self._compiled.match(path_str):
            return True
        if self._basename_only:
            return bool(self._compiled.match(path_str.rsplit("/", 1)[-1]))
        return False


def compile_glob(pattern: str) -> GlobMatcher:
    """Compile a single glob pattern into a matcher."""
    normalized = pattern.strip().replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return GlobMatcher(
        pattern=pattern,
        _compiled=regex.compile(glob_to_regex(normalized)),
        _basename_only="/" not in normalized,
    )


def compile_globs(patterns: list[str]) -> list[GlobMatcher]:
    """Compile a list of glob patterns, skipping blank entries."""
    return [compile_glob(p) for p in patterns if p and p.strip()]
