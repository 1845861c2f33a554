"""File helpers shared by the write-back engines."""

import logging
from pathlib import Path

__all__ = ["detect_newline", "read_source_file", "write_source_file"]

logger = logging.getLogger(__name__)


def detect_newline(content: str) -> str:
    """Return the first line ending used in the content, defaulting to '\\n'."""
    index = content.find("\n")
    if index > 0 and content[index - 1] == "\r":
        return "\r\n"
    if index == -1 and "\r" in content:
        return "\r"
    return "\n"


def read_source_file(file_path: Path) -> str:
    """Read a file without translating its line endings."""
    with file_path.open(encoding="utf-8", newline="") as f:
        return f.read()


def write_source_file(file_path: Path, content: str) -> None:
    """Write content back exactly as given, line endings included."""
    with file_path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info("Updated %s with context comments", file_path)
