"""Output writers and write-back engines."""

from pathlib import Path

from txcontext.parsers.base import is_android_resource_file

from .android_xml_writer import AndroidXmlWriter
from .comment_policy import build_comment, is_sentinel_description
from .csv_writer import CsvWriter
from .json_writer import JsonWriter
from .strings_writer import StringsWriter
from .swift_writer import SwiftWriter


def source_writer_for(path: str | Path, context_prefix: str, context_mode: str) -> StringsWriter | AndroidXmlWriter | None:
    """Return the write-back engine for a translation file, or None if its format has none."""
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".strings":
        return StringsWriter(context_prefix=context_prefix, context_mode=context_mode)
    if suffix == ".xml" and is_android_resource_file(file_path):
        return AndroidXmlWriter(context_prefix=context_prefix, context_mode=context_mode)
    return None


__all__ = [
    "AndroidXmlWriter",
    "CsvWriter",
    "JsonWriter",
    "StringsWriter",
    "SwiftWriter",
    "build_comment",
    "is_sentinel_description",
    "source_writer_for",
]
