"""Defines the base class for translation file parsers and parser selection."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from txcontext.errors import UnsupportedFormatError
from txcontext.types import TranslationEntry

__all__ = ["BaseParser", "entries_from_mapping", "flatten_keys", "is_android_resource_file", "parser_for"]

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all translation file parsers."""

    @abstractmethod
    def parse(self, path: Path) -> list[TranslationEntry]:
        """
        Read a translation file.

        Args:
            path: The file to parse.

        Returns:
            The entries in file order.

        Raises:
            TranslationParseError: If the file cannot be read or is malformed.

        """
        raise NotImplementedError


def flatten_keys(data: Mapping[str, Any], prefix: str | None = None) -> dict[str, Any]:
    """
    Flatten nested mappings into dotted keys.

    `{"a": {"b": "c"}}` becomes `{"a.b": "c"}`. Lists, typically plural
    forms, are joined with ' | '.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_keys(value, full_key))
        elif isinstance(value, list):
            flat[full_key] = " | ".join(str(item) for item in value)
        else:
            flat[full_key] = value
    return flat


def entries_from_mapping(data: Mapping[str, Any], path: Path) -> list[TranslationEntry]:
    """Flatten a key/value document into entries, dropping blank values."""
    entries = []
    for key, value in flatten_keys(data).items():
        if value is None or not str(value).strip():
            continue
        entries.append(TranslationEntry(key=key, text=str(value), source_file=path))
    return entries


def is_android_resource_file(path: Path) -> bool:
    """Return True for Android string resources: strings.xml or any XML under res/values*."""
    if path.name.lower() == "strings.xml":
        return True
    return path.suffix.lower() == ".xml" and path.parent.name.startswith("values") and path.parent.parent.name == "res"


def parser_for(path: str | Path) -> BaseParser:
    """
    Select the parser for a translation file by its name.

    Raises:
        UnsupportedFormatError: If no parser handles the file.

    """
    from .android_xml_parser import AndroidXmlParser
    from .json_parser import JsonParser
    from .strings_parser import StringsParser
    from .yaml_parser import YamlParser

    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".strings":
        return StringsParser()
    if suffix == ".json":
        return JsonParser()
    if suffix in (".yml", ".yaml"):
        return YamlParser()
    if suffix == ".xml":
        if is_android_resource_file(file_path):
            return AndroidXmlParser()
        msg = f"Unsupported XML format: {file_path} (only Android strings.xml is supported)"
        raise UnsupportedFormatError(msg)

    msg = f"Unsupported translation file format: {file_path}"
    raise UnsupportedFormatError(msg)
