"""Writes context comments into Apple .strings files."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import regex

from txcontext.config import DEFAULT_CONTEXT_PREFIX
from txcontext.types import ExtractionResult

from .base import detect_newline, read_source_file, write_source_file
from .comment_policy import build_comment, writable_results

__all__ = ["StringsWriter", "escape_strings_comment"]

logger = logging.getLogger(__name__)

ENTRY_PATTERN: Final = regex.compile(r'^(?P<indent>\s*)"(?P<key>[^"]+)"\s*=\s*"(.*)"\s*;\s*$')
COMMENT_LINE_PATTERN: Final = regex.compile(r"^\s*/\*(?P<text>.*)\*/\s*$")
SECTION_HEADER_PATTERN: Final = regex.compile(r"^\s*/\*\s*(MARK|TODO|FIXME|#pragma)")


def _split_delimiters(text: str) -> str:
    return text.replace("*/", "* /").replace("/*", "/ *")


def escape_strings_comment(text: str, *, strip: bool = True) -> str:
    """Neutralize comment delimiters and flatten newlines so the text fits one /* */ line."""
    escaped = _split_delimiters(text).replace("\r", " ").replace("\n", " ")
    return escaped.strip() if strip else escaped


def _line_ending(line: str) -> str:
    stripped = line.rstrip("\r\n")
    return line[len(stripped) :]


class StringsWriter:
    """
    Updates the `/* ... */` comment above each entry of a .strings file.

    The file is re-emitted line by line. Lines other than entry comments are
    written back untouched, with their original line endings.
    """

    def __init__(self, context_prefix: str = DEFAULT_CONTEXT_PREFIX, context_mode: str = "replace") -> None:
        """
        Initialize the writer.

        Args:
            context_prefix: Marker placed in front of each description.
            context_mode: 'replace' or 'append', see `build_comment`.

        """
        self.context_prefix = context_prefix
        self.context_mode = context_mode
        self._comment_prefix = escape_strings_comment(context_prefix, strip=False)

    def update_content(self, content: str, results_by_key: Mapping[str, ExtractionResult]) -> str:
        """Return the content with every known entry's comment resolved."""
        results = writable_results(results_by_key)
        if not results:
            return content

        newline = detect_newline(content)
        output: list[str] = []
        for line in content.splitlines(keepends=True):
            match = ENTRY_PATTERN.match(line.rstrip("\r\n"))
            result = results.get(match.group("key")) if match else None
            if match and result is not None:
                self._apply_comment(output, match.group("indent"), result.description, newline)
            output.append(line)
        return "".join(output)

    def _entry_comment_index(self, output: list[str]) -> int | None:
        """Return the index of the comment line that belongs to the next entry, if any."""
        for index in range(len(output) - 1, -1, -1):
            line = output[index]
            if not line.strip():
                continue
            if not COMMENT_LINE_PATTERN.match(line.rstrip("\r\n")):
                return None
            is_context = bool(self._comment_prefix) and self._comment_prefix in line
            if SECTION_HEADER_PATTERN.match(line) and not is_context:
                return None
            return index
        return None

    def _resolve(self, existing: str | None, description: str) -> str:
        # A prefix ending in '*' followed by a description starting with '/' still closes the comment.
        return _split_delimiters(build_comment(existing, description, self._comment_prefix, self.context_mode))

    def _apply_comment(self, output: list[str], indent: str, description: str, newline: str) -> None:
        escaped = escape_strings_comment(description)
        index = self._entry_comment_index(output)
        if index is None:
            comment = self._resolve(None, escaped)
            output.append(f"{indent}/* {comment} */{newline}")
            return

        existing_line = output[index]
        existing = COMMENT_LINE_PATTERN.match(existing_line.rstrip("\r\n")).group("text").strip()
        comment = self._resolve(existing, escaped)
        comment_indent = existing_line[: len(existing_line) - len(existing_line.lstrip())]
        output[index] = f"{comment_indent}/* {comment} */{_line_ending(existing_line) or newline}"

    def write(self, results_by_key: Mapping[str, ExtractionResult], path: Path) -> bool:
        """
        Update a .strings file in place.

        Returns:
            True if the file content changed and was written.

        """
        if not path.is_file():
            logger.warning("Translation file not found for write-back: %s", path)
            return False

        content = read_source_file(path)
        updated = self.update_content(content, results_by_key)
        if updated == content:
            logger.debug("No comment changes for %s", path)
            return False
        write_source_file(path, updated)
        return True
