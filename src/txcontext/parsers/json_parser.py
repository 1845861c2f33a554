"""Parser for nested JSON translation files."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from txcontext.errors import TranslationParseError
from txcontext.types import TranslationEntry

from .base import BaseParser, entries_from_mapping

__all__ = ["JsonParser"]

logger = logging.getLogger(__name__)


class JsonParser(BaseParser):
    """Parses JSON objects, flattening nested keys with '.'."""

    def parse(self, path: Path) -> list[TranslationEntry]:
        """Parse a JSON file into entries."""
        try:
            with path.open("rb") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Could not parse JSON translation file {path}: {e}"
            raise TranslationParseError(msg) from e

        if not isinstance(data, Mapping):
            msg = f"JSON translation file {path} must contain an object at the top level."
            raise TranslationParseError(msg)
        return entries_from_mapping(data, path)
