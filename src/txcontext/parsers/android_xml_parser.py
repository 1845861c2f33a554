"""Parser for Android string resource files."""

import logging
from pathlib import Path
from typing import Final

import regex
from lxml import etree

from txcontext.errors import TranslationParseError
from txcontext.types import TranslationEntry

from .base import BaseParser

__all__ = ["AndroidXmlParser", "unescape_android_string"]

logger = logging.getLogger(__name__)

_ESCAPE_PATTERN: Final = regex.compile(r"\\(.)")
_ESCAPES: Final[dict[str, str]] = {"'": "'", '"': '"', "n": "\n", "t": "\t", "@": "@", "?": "?", "\\": "\\"}


def unescape_android_string(value: str) -> str:
    """Resolve Android resource escapes such as \\' and \\n. Unknown escapes are kept as written."""
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), value)


def _element_text(element: etree._Element) -> str:
    """Return the full text of an element, including text inside inline markup like <b>."""
    return "".join(element.itertext())


def _preceding_comment(element: etree._Element) -> str | None:
    """Return the text of the comment directly before the element, if any."""
    previous = element.getprevious()
    if previous is not None and previous.tag is etree.Comment:
        return (previous.text or "").strip()
    return None


class AndroidXmlParser(BaseParser):
    """
    Parses `<resources>` files.

    Produces one entry per `<string>`, one per `<string-array>` item keyed
    `name[index]`, and one per `<plurals>` item keyed `name:quantity`.
    """

    def parse(self, path: Path) -> list[TranslationEntry]:
        """Parse a strings.xml file into entries."""
        parser = etree.XMLParser(remove_blank_text=False, remove_comments=False, resolve_entities=False)
        try:
            tree = etree.parse(str(path), parser)
        except (OSError, etree.XMLSyntaxError) as e:
            msg = f"Could not parse Android resource file {path}: {e}"
            raise TranslationParseError(msg) from e

        root = tree.getroot()
        entries: list[TranslationEntry] = []

        for element in root.iterchildren("string"):
            key = element.get("name")
            if not key:
                continue
            entries.append(
                TranslationEntry(
                    key=key,
                    text=unescape_android_string(_element_text(element)),
                    source_file=path,
                    metadata={"comment": _preceding_comment(element)},
                )
            )

        for array in root.iterchildren("string-array"):
            name = array.get("name")
            if not name:
                continue
            for index, item in enumerate(array.iterchildren("item")):
                entries.append(
                    TranslationEntry(
                        key=f"{name}[{index}]",
                        text=unescape_android_string(_element_text(item)),
                        source_file=path,
                        metadata={"array": name, "index": index},
                    )
                )

        for plurals in root.iterchildren("plurals"):
            name = plurals.get("name")
            if not name:
                continue
            for item in plurals.iterchildren("item"):
                quantity = item.get("quantity")
                entries.append(
                    TranslationEntry(
                        key=f"{name}:{quantity}",
                        text=unescape_android_string(_element_text(item)),
                        source_file=path,
                        metadata={"plural": name, "quantity": quantity},
                    )
                )

        logger.debug("Parsed %d entries from %s", len(entries), path)
        return entries
