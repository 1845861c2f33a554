"""Writes context into the `comment:` argument of Swift localization calls."""

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Final

import regex

from txcontext.config import DEFAULT_CONTEXT_PREFIX, DEFAULT_SWIFT_FUNCTIONS
from txcontext.search.discovery import discover_files
from txcontext.search.globs import GlobMatcher
from txcontext.search.patterns import Platform
from txcontext.types import ExtractionResult

from .base import read_source_file, write_source_file
from .comment_policy import build_comment, writable_results

__all__ = ["SwiftWriter", "escape_swift_string", "find_swift_files", "single_line", "unescape_swift_string"]

logger = logging.getLogger(__name__)

_UNESCAPE_PATTERN: Final = regex.compile(r"\\(.)")
_UNESCAPES: Final[dict[str, str]] = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}

# Everything up to the opening quote of the `comment:` literal, then its body.
_COMMENT_ARGUMENT: Final[str] = r'[^)]*?\bcomment:\s*")(?P<comment>(?:[^"\\]|\\.)*)"'


def unescape_swift_string(value: str) -> str:
    """Resolve the escapes of a Swift string literal body. Unknown escapes are kept as written."""
    return _UNESCAPE_PATTERN.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), value)


def escape_swift_string(value: str) -> str:
    """Escape text for use inside a Swift string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")


def single_line(text: str) -> str:
    """Flatten line breaks to spaces so a comment stays on one logical line."""
    return text.replace("\r", " ").replace("\n", " ").strip()


def _call_pattern(function: str, escaped_key: str) -> str:
    """Return the pattern of a call to `function` whose first string argument is the key."""
    if function == "NSLocalizedString":
        return rf'NSLocalizedString\(\s*"{escaped_key}"'
    if function == "String(localized:":
        return rf'String\(\s*localized:\s*"{escaped_key}"'
    if function == "Text(":
        return rf'\bText\([^)]*?"{escaped_key}"'
    name = regex.escape(function.removesuffix("("))
    return rf'{name}\([^)]*?"{escaped_key}"'


def find_swift_files(source_paths: Iterable[str | Path], ignore_matchers: list[GlobMatcher] | None = None) -> list[Path]:
    """Return the Swift files under the source paths, honoring the ignore globs."""
    files = discover_files(source_paths, ignore_matchers or [], Platform.IOS)
    return [path for path in files if path.suffix == ".swift"]


class SwiftWriter:
    """
    Rewrites `comment:` string literals of localization calls that use a known key.

    Supports NSLocalizedString, String(localized:), Text() and any custom
    function written as 'MyLocalizedString(' in the configuration.
    """

    def __init__(
        self,
        functions: Iterable[str] | None = None,
        context_prefix: str = DEFAULT_CONTEXT_PREFIX,
        context_mode: str = "replace",
    ) -> None:
        """
        Initialize the writer.

        Args:
            functions: Localization functions to update. Defaults to the built-in three.
            context_prefix: Marker placed in front of each description.
            context_mode: 'replace' or 'append', see `build_comment`.

        """
        self.functions = list(functions) if functions else list(DEFAULT_SWIFT_FUNCTIONS)
        self.context_prefix = context_prefix
        self.context_mode = context_mode
        self._comment_prefix = context_prefix.replace("\r", " ").replace("\n", " ")

    def _resolve_comment(self, existing_literal: str, description: str) -> str:
        existing = unescape_swift_string(existing_literal)
        comment = build_comment(existing, single_line(description), self._comment_prefix, self.context_mode)
        return escape_swift_string(comment)

    def _replacer(self, description: str) -> Callable[[regex.Match], str]:
        def replace(match: regex.Match) -> str:
            return f'{match.group("lead")}{self._resolve_comment(match.group("comment"), description)}"'

        return replace

    def update_content(self, content: str, results_by_key: Mapping[str, ExtractionResult]) -> str:
        """Return the content with the comments of every known key's calls resolved."""
        for key, result in writable_results(results_by_key).items():
            escaped_key = regex.escape(key)
            for function in self.functions:
                pattern = regex.compile(f"(?P<lead>{_call_pattern(function, escaped_key)}{_COMMENT_ARGUMENT}")
                content = pattern.sub(self._replacer(result.description), content)
        return content

    def update_file(self, path: Path, results_by_key: Mapping[str, ExtractionResult]) -> bool:
        """
        Update one Swift file in place.

        Returns:
            True if the file content changed and was written.

        """
        if not path.is_file():
            return False

        try:
            content = read_source_file(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s for write-back: %s", path, e)
            return False

        updated = self.update_content(content, results_by_key)
        if updated == content:
            return False
        write_source_file(path, updated)
        return True

    def write_to_source_files(
        self,
        results_by_key: Mapping[str, ExtractionResult],
        source_paths: Iterable[str | Path],
        ignore_matchers: list[GlobMatcher] | None = None,
    ) -> int:
        """
        Update every Swift file under the source paths.

        Returns:
            The number of files that changed.

        """
        updated_count = 0
        for swift_file in find_swift_files(source_paths, ignore_matchers):
            if self.update_file(swift_file, results_by_key):
                updated_count += 1
        return updated_count
