"""Defines the execution context shared by the processing pipeline."""

from dataclasses import dataclass, field

from .cache import ContextCache
from .config import TxContextConfig
from .llm.base import BaseContextClient
from .search.searcher import Searcher
from .types import ExtractionResult, TranslationEntry

__all__ = ["ExecutionContext"]


@dataclass
class ExecutionContext:
    """A data class to hold the state of a single extraction run."""

    config: TxContextConfig
    version: str = "0.0.0-dev"
    client: BaseContextClient | None = None
    searcher: Searcher | None = None
    cache: ContextCache | None = None
    entries: list[TranslationEntry] = field(default_factory=list)
    results: list[ExtractionResult] = field(default_factory=list)
    errors: list[ExtractionResult] = field(default_factory=list)
    changed_keys: set[str] | None = None
    updated_files: list[str] = field(default_factory=list)
    is_finished: bool = False

    @property
    def is_dry_run(self) -> bool:
        """Return True when nothing may be sent to the model or written to disk."""
        return self.config.dry_run
