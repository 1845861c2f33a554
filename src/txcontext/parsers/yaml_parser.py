"""Parser for YAML translation files, including Rails-style locale files."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import regex
import yaml

from txcontext.errors import TranslationParseError
from txcontext.types import TranslationEntry

from .base import BaseParser, entries_from_mapping

__all__ = ["YamlParser", "strip_locale_root"]

logger = logging.getLogger(__name__)

LOCALE_KEY_PATTERN: Final = regex.compile(r"^[a-z]{2}(-[a-z]{2})?$", regex.IGNORECASE)


def strip_locale_root(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Drop a single top-level locale key such as 'en' or 'pt-BR'.

    `{"en": {"hello": "Hello"}}` becomes `{"hello": "Hello"}`.
    """
    if len(data) != 1:
        return data
    locale_key, value = next(iter(data.items()))
    if isinstance(value, Mapping) and LOCALE_KEY_PATTERN.match(str(locale_key)):
        logger.debug("Stripping top-level locale key '%s'.", locale_key)
        return value
    return data


class YamlParser(BaseParser):
    """Parses YAML mappings, flattening nested keys with '.'."""

    def parse(self, path: Path) -> list[TranslationEntry]:
        """Parse a YAML file into entries."""
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            msg = f"Could not parse YAML translation file {path}: {e}"
            raise TranslationParseError(msg) from e

        if data is None:
            return []
        if not isinstance(data, Mapping):
            msg = f"YAML translation file {path} must contain a mapping at the top level."
            raise TranslationParseError(msg)
        return entries_from_mapping(strip_locale_root(data), path)
