"""Translation file parsers."""

from .android_xml_parser import AndroidXmlParser
from .base import BaseParser, flatten_keys, parser_for
from .json_parser import JsonParser
from .strings_parser import StringsParser
from .yaml_parser import YamlParser

__all__ = [
    "AndroidXmlParser",
    "BaseParser",
    "JsonParser",
    "StringsParser",
    "YamlParser",
    "flatten_keys",
    "parser_for",
]
