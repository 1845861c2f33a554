"""Parser for Apple .strings files."""

import logging
from pathlib import Path
from typing import Final

import regex

from txcontext.errors import TranslationParseError
from txcontext.types import TranslationEntry

from .base import BaseParser

__all__ = ["COMMENT_PATTERN", "STRING_PATTERN", "StringsParser", "unescape_strings_value"]

logger = logging.getLogger(__name__)

# "key" = "value";
STRING_PATTERN: Final = regex.compile(r'^\s*"([^"]+)"\s*=\s*"(.*)"\s*;\s*$')
# /* comment */
COMMENT_PATTERN: Final = regex.compile(r"/\*\s*(.*?)\s*\*/", regex.DOTALL)

_ESCAPE_PATTERN: Final = regex.compile(r"\\(.)")
_ESCAPES: Final[dict[str, str]] = {'"': '"', "n": "\n", "t": "\t", "\\": "\\"}


def unescape_strings_value(value: str) -> str:
    """Resolve the escape sequences .strings values use. Unknown escapes are kept as written."""
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), value)


class StringsParser(BaseParser):
    """
    Parses `"key" = "value";` lines.

    A `/* ... */` comment is attached to the next entry as its `comment`
    metadata and then discarded.
    """

    def parse(self, path: Path) -> list[TranslationEntry]:
        """Parse a .strings file into entries."""
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Could not read translation file {path}: {e}"
            raise TranslationParseError(msg) from e

        entries: list[TranslationEntry] = []
        current_comment: str | None = None
        for line in content.splitlines():
            comment_match = COMMENT_PATTERN.search(line)
            if comment_match:
                current_comment = comment_match.group(1).strip()

            string_match = STRING_PATTERN.match(line)
            if string_match:
                entries.append(
                    TranslationEntry(
                        key=string_match.group(1),
                        text=unescape_strings_value(string_match.group(2)),
                        source_file=path,
                        metadata={"comment": current_comment},
                    )
                )
                current_comment = None

        logger.debug("Parsed %d entries from %s", len(entries), path)
        return entries
