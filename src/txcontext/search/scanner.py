"""Scans a single source file for usage matches and builds context windows."""

import logging
from pathlib import Path
from typing import Final

import regex

from txcontext.types import Match

__all__ = ["MATCH_MARKER", "MULTILINE_LOOKBACK", "build_context", "physical_lines", "scan_file", "scan_lines"]

logger = logging.getLogger(__name__)

MATCH_MARKER: Final[str] = ">>> "

# How many preceding lines may hold the opening tokens of a call whose key
# literal sits on the current line.
MULTILINE_LOOKBACK: Final[int] = 3


def physical_lines(content: str) -> list[str]:
    """Split text on line feeds only. Form feeds, vertical tabs and Unicode separators stay inside their line."""
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def build_context(lines: list[str], index: int, radius: int) -> str:
    """Return the window of lines around index, with the matched line marked."""
    start = max(0, index - radius)
    end = min(len(lines), index + radius + 1)
    window = [f"{MATCH_MARKER}{lines[i]}" if i == index else lines[i] for i in range(start, end)]
    return "\n".join(window)


def _matches_across_lines(lines: list[str], index: int, patterns: list[regex.Pattern]) -> bool:
    """Test the patterns against the current line joined with a few preceding lines."""
    start = max(0, index - MULTILINE_LOOKBACK)
    if start == index:
        return False
    preceding = "\n".join(lines[start:index]) + "\n"
    joined = preceding + lines[index]
    # Only matches ending inside the current line count, otherwise a call on
    # an earlier line would be reported again here.
    return any(m.end() > len(preceding) for pattern in patterns for m in pattern.finditer(joined))


def scan_lines(lines: list[str], patterns: list[regex.Pattern], key: str) -> list[int]:
    """
    Return the 0-based indices of lines that match at least one pattern.

    A line that contains the key but no complete call shape is re-tested
    together with its preceding lines, which finds call sites split across
    several physical lines.
    """
    indices = []
    for index, line in enumerate(lines):
        if any(pattern.search(line) for pattern in patterns):
            indices.append(index)
        elif key and key in line and _matches_across_lines(lines, index, patterns):
            indices.append(index)
    return indices


def scan_file(path: Path, patterns: list[regex.Pattern], key: str, context_lines: int) -> list[Match]:
    """
    Scan one file for lines matching the key's patterns.

    Unreadable files (missing, permission denied, directories) and files that
    are not valid UTF-8 text are skipped and yield no matches. Any other I/O
    error propagates to the caller.

    Args:
        path: The file to scan.
        patterns: Compiled patterns for the key.
        key: The raw key, used to find multi-line call sites.
        context_lines: The radius of the context window around each match.

    Returns:
        Matches in top-to-bottom line order.

    """
    try:
        content = path.read_text(encoding="utf-8")
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        logger.debug("Skipping unreadable file %s: %s", path, e)
        return []
    except UnicodeDecodeError:
        logger.debug("Skipping non-text file %s", path)
        return []

    lines = physical_lines(content)
    return [
        Match(
            file=str(path),
            line=index + 1,
            match_line=lines[index],
            context=build_context(lines, index, context_lines),
        )
        for index in scan_lines(lines, patterns, key)
    ]
