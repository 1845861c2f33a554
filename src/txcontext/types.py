"""Defines shared data structures and types for txcontext."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

__all__ = ["ExtractionResult", "Match", "TranslationEntry"]


@dataclass(frozen=True)
class TranslationEntry:
    """
    A single localizable key/text pair read from a translation file.

    Attributes:
        key: The translation key, e.g. 'settings.title'.
        text: The source-language text for the key.
        source_file: The translation file the entry was read from.
        metadata: Parser-specific extras such as an existing comment.

    """

    key: str
    text: str
    source_file: Path
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class Match:
    """
    One usage location of a key in application source code.

    Attributes:
        file: The source file path, as discovered.
        line: The 1-based line number of the matching line.
        match_line: The text of the matching line.
        context: Surrounding lines, with the matching line prefixed by '>>> '.

    """

    file: str
    line: int
    match_line: str = ""
    context: str = ""

    @property
    def location(self) -> str:
        """Return the 'file:line' form used in output records."""
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class ExtractionResult:
    """The outcome of processing one translation entry."""

    key: str
    text: str
    description: str
    ui_element: str | None = None
    tone: str | None = None
    max_length: int | None = None
    locations: tuple[str, ...] = ()
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-serializable dictionary."""
        data = asdict(self)
        data["locations"] = list(self.locations)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtractionResult":
        """Build a result from a dictionary, ignoring unknown keys."""
        return cls(
            key=data["key"],
            text=data["text"],
            description=data["description"],
            ui_element=data.get("ui_element"),
            tone=data.get("tone"),
            max_length=data.get("max_length"),
            locations=tuple(data.get("locations") or ()),
            error=data.get("error"),
        )
