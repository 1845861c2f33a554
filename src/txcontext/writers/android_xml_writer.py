"""Writes context comments into Android string resource files."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import regex
from lxml import etree

from txcontext.config import DEFAULT_CONTEXT_PREFIX
from txcontext.types import ExtractionResult

from .base import detect_newline, read_source_file, write_source_file
from .comment_policy import build_comment, writable_results

__all__ = ["AndroidXmlWriter", "escape_xml_comment"]

logger = logging.getLogger(__name__)

XML_DECLARATION_PATTERN: Final = regex.compile(r"^\s*(<\?xml[^>]*\?>)")


def _split_dashes(text: str) -> str:
    while "--" in text:
        text = text.replace("--", "- -")
    return text


def escape_xml_comment(text: str, *, strip: bool = True) -> str:
    """Make text safe inside an XML comment: no '--' sequences and no newlines."""
    escaped = text.replace("\r", " ").replace("\n", " ")
    return _split_dashes(escaped.strip() if strip else escaped)


def _create_parser() -> etree.XMLParser:
    """Return a parser that keeps whitespace, comments and CDATA, and resolves no external entities."""
    return etree.XMLParser(
        remove_blank_text=False,
        remove_comments=False,
        strip_cdata=False,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
    )


def _leading_whitespace(element: etree._Element) -> str:
    """Return the whitespace text that sits directly before an element."""
    previous = element.getprevious()
    if previous is not None:
        return previous.tail or ""
    parent = element.getparent()
    return (parent.text or "") if parent is not None else ""


class AndroidXmlWriter:
    """
    Updates the comment node directly before each `<string>` of a resources file.

    Works on the parsed tree with lxml. A comment separated from its element
    by whitespace only is updated in place; otherwise a new comment is
    inserted with the element's indentation.
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
        self._comment_prefix = escape_xml_comment(context_prefix, strip=False)

    def _resolve(self, existing: str | None, description: str) -> str:
        # Escaped again as a whole: a prefix ending in '-' and a description
        # starting with one still join into '--'.
        return _split_dashes(build_comment(existing, description, self._comment_prefix, self.context_mode))

    def _apply_comment(self, element: etree._Element, description: str) -> bool:
        """Resolve the comment before one element. Returns True if the tree changed."""
        escaped = escape_xml_comment(description)
        previous = element.getprevious()
        if previous is not None and previous.tag is etree.Comment and not (previous.tail or "").strip():
            existing = (previous.text or "").strip()
            comment = self._resolve(existing, escaped)
            if comment == existing:
                return False
            previous.text = f" {comment} "
            return True

        whitespace = _leading_whitespace(element)
        comment_node = etree.Comment(f" {self._resolve(None, escaped)} ")
        comment_node.tail = ("\n" + whitespace.rsplit("\n", 1)[-1]) if "\n" in whitespace else whitespace
        element.addprevious(comment_node)
        return True

    def update_content(self, content: str, results_by_key: Mapping[str, ExtractionResult]) -> str:
        """Return the serialized document with every known string's comment resolved."""
        results = writable_results(results_by_key)
        if not results:
            return content

        root = etree.fromstring(content.encode("utf-8"), _create_parser())
        changed = False
        for element in list(root.iterchildren("string")):
            result = results.get(element.get("name"))
            if result is None:
                continue
            if self._apply_comment(element, result.description):
                changed = True

        if not changed:
            return content
        return self._serialize(root, content)

    def _serialize(self, root: etree._Element, original: str) -> str:
        """Serialize the tree, restoring the declaration, line endings and trailing newline of the original."""
        body = etree.tostring(root.getroottree(), encoding="unicode")
        declaration = XML_DECLARATION_PATTERN.match(original)
        if declaration:
            body = f"{declaration.group(1)}\n{body}"
        if original.endswith(("\n", "\r")) and not body.endswith("\n"):
            body += "\n"
        newline = detect_newline(original)
        if newline != "\n":
            body = body.replace("\n", newline)
        return body

    def write(self, results_by_key: Mapping[str, ExtractionResult], path: Path) -> bool:
        """
        Update a strings.xml file in place.

        Returns:
            True if the file content changed and was written.

        """
        if not path.is_file():
            logger.warning("Translation file not found for write-back: %s", path)
            return False

        content = read_source_file(path)
        try:
            updated = self.update_content(content, results_by_key)
        except etree.XMLSyntaxError as e:
            logger.warning("Could not parse %s for write-back: %s", path, e)
            return False

        if updated == content:
            logger.debug("No comment changes for %s", path)
            return False
        write_source_file(path, updated)
        return True
