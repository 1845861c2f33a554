"""Manages the overall txcontext extraction workflow."""

import logging
from typing import TYPE_CHECKING

from . import __version__
from .cache import ContextCache
from .config import TxContextConfig
from .errors import ConfigError
from .git_diff import GitDiff
from .llm import create_client
from .llm.base import BaseContextClient
from .models import ExecutionContext
from .processing import (
    CodeWriteBackProcessor,
    ExtractionProcessor,
    FilterProcessor,
    LoadProcessor,
    OutputProcessor,
    Processor,
    WriteBackProcessor,
)
from .reporters import DryRunReporter, SummaryReporter
from .search import Searcher

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["run_extraction", "validate_diff_base"]

logger = logging.getLogger(__name__)


def validate_diff_base(config: TxContextConfig, git_diff: GitDiff | None = None) -> None:
    """
    Check that the diff base can be used.

    Raises:
        ConfigError: If the working directory is not a git repository or the ref is unknown.

    """
    if not config.diff_base:
        return
    git = git_diff or GitDiff(base_ref=config.diff_base)
    if not git.available():
        msg = "--diff-base requires a git repository"
        raise ConfigError(msg)
    if not git.base_ref_exists():
        msg = f"git ref '{config.diff_base}' not found. Try: origin/main, main, or a specific commit SHA"
        raise ConfigError(msg)


def run_extraction(
    config: TxContextConfig,
    *,
    client: BaseContextClient | None = None,
    searcher: Searcher | None = None,
    cache: ContextCache | None = None,
    show_progress: bool = True,
) -> ExecutionContext:
    """
    Run one extraction by orchestrating a multi-phase processor pipeline.

    The LLM client is created before any file is read, so a missing API key
    fails fast. Collaborators may be injected, which tests use to run the
    pipeline offline.

    Args:
        config: The resolved configuration.
        client: LLM client to use instead of the configured provider.
        searcher: Search session to use instead of building one from the config.
        cache: Cache to use instead of the default cache directory.
        show_progress: Whether to render the progress bar.

    Returns:
        The execution context holding the entries, results and errors.

    Raises:
        ConfigError: If the configuration cannot be used.
        UnsupportedFormatError: If a translation file has an unknown format.

    """
    validate_diff_base(config)
    if client is None and not config.dry_run:
        client = create_client(config.provider, config.custom_prompt)

    context = ExecutionContext(
        config=config,
        version=__version__,
        client=client,
        searcher=searcher,
        cache=cache,
    )

    pipeline: Sequence[Processor] = [
        LoadProcessor(),
        FilterProcessor(),
        ExtractionProcessor(show_progress=show_progress),
        OutputProcessor(),
        WriteBackProcessor(),
        CodeWriteBackProcessor(),
    ]

    for processor in pipeline:
        logger.debug("Executing processor: %s", processor.__class__.__name__)
        processor.process(context)
        if context.is_finished:
            break

    reporter = DryRunReporter() if context.is_dry_run else SummaryReporter()
    reporter.generate(context)
    return context
