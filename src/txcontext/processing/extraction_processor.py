"""Phase 3: search each entry's usages and ask the model for context, concurrently."""

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeRemainingColumn

from txcontext.cache import ContextCache
from txcontext.llm import create_client
from txcontext.llm.base import BaseContextClient
from txcontext.match_state import NO_USAGE_DESCRIPTION, PROCESSING_FAILED_DESCRIPTION, EntryLifecycle
from txcontext.models import ExecutionContext
from txcontext.search import Searcher
from txcontext.types import ExtractionResult, TranslationEntry

from .base import Processor

__all__ = ["EntryExtractor", "ExtractionProcessor", "run_entries"]

logger = logging.getLogger(__name__)


class EntryExtractor:
    """
    Runs the per-entry state machine.

    PENDING → CACHE_CHECK → {CACHED | SEARCHING} → {NO_USAGE | MATCHED}
    → {LLM_CALL → DONE} | DONE

    One instance is shared by all workers. The LLM gate bounds how many
    entries may be waiting on the model at once.
    """

    def __init__(
        self,
        searcher: Searcher,
        client: BaseContextClient,
        cache: ContextCache,
        *,
        max_matches_per_key: int = 3,
        model: str | None = None,
        llm_gate: threading.BoundedSemaphore | None = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            searcher: The search session shared by all entries.
            client: The LLM client.
            cache: The result cache.
            max_matches_per_key: How many matches are shown to the model.
            model: Model override passed to the client.
            llm_gate: Semaphore bounding concurrent model calls.

        """
        self.searcher = searcher
        self.client = client
        self.cache = cache
        self.max_matches_per_key = max_matches_per_key
        self.model = model
        self.llm_gate = llm_gate or threading.BoundedSemaphore(1)

    def _trace(self, entry: TranslationEntry, state: EntryLifecycle) -> None:
        logger.debug("[%s] %s", entry.key, state.value)

    def _from_cache(self, entry: TranslationEntry) -> ExtractionResult | None:
        cached = self.cache.get(entry.key, entry.text)
        if cached is None:
            return None
        try:
            return ExtractionResult.from_dict(cached)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed cache record for '%s': %s", entry.key, e)
            return None

    def extract(self, entry: TranslationEntry) -> ExtractionResult:
        """
        Produce the result for one entry.

        Exceptions propagate; `run_entries` turns them into failed results.
        """
        self._trace(entry, EntryLifecycle.CACHE_CHECK)
        cached = self._from_cache(entry)
        if cached is not None:
            self._trace(entry, EntryLifecycle.CACHED)
            return cached

        self._trace(entry, EntryLifecycle.SEARCHING)
        matches = self.searcher.search(entry.key)

        if not matches:
            self._trace(entry, EntryLifecycle.NO_USAGE)
            result = ExtractionResult(key=entry.key, text=entry.text, description=NO_USAGE_DESCRIPTION)
            self.cache.set(entry.key, entry.text, result.to_dict())
            return result

        self._trace(entry, EntryLifecycle.MATCHED)
        matches = matches[: self.max_matches_per_key]

        self._trace(entry, EntryLifecycle.LLM_CALL)
        with self.llm_gate:
            context_result = self.client.generate_context(entry.key, entry.text, matches, self.model)

        result = ExtractionResult(
            key=entry.key,
            text=entry.text,
            description=context_result.description,
            ui_element=context_result.ui_element,
            tone=context_result.tone,
            max_length=context_result.max_length,
            locations=tuple(m.location for m in matches),
            error=context_result.error,
        )
        self.cache.set(entry.key, entry.text, result.to_dict())
        return result

    def extract_safely(self, entry: TranslationEntry) -> ExtractionResult:
        """Produce the result for one entry, converting any exception into a failed result."""
        try:
            result = self.extract(entry)
        except Exception as e:
            logger.debug("Processing failed for '%s'", entry.key, exc_info=True)
            return ExtractionResult(
                key=entry.key,
                text=entry.text,
                description=PROCESSING_FAILED_DESCRIPTION,
                error=str(e) or e.__class__.__name__,
            )
        self._trace(entry, EntryLifecycle.DONE)
        return result


def _create_progress(*, disable: bool) -> Progress:
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        disable=disable,
    )


def run_entries(
    entries: Sequence[TranslationEntry],
    extractor: EntryExtractor,
    concurrency: int,
    *,
    show_progress: bool = True,
) -> tuple[list[ExtractionResult], list[ExtractionResult]]:
    """
    Process entries on a fixed-size worker pool.

    Every entry yields exactly one result, in completion order. Results whose
    `error` is set are also collected in the error list.

    Returns:
        A tuple of (results, errors).

    Raises:
        KeyboardInterrupt: Re-raised after pending work is cancelled.

    """
    results: list[ExtractionResult] = []
    errors: list[ExtractionResult] = []
    lock = threading.Lock()

    def work(entry: TranslationEntry) -> None:
        result = extractor.extract_safely(entry)
        with lock:
            results.append(result)
            if result.error:
                errors.append(result)

    executor = ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="txcontext-worker")
    try:
        with _create_progress(disable=not show_progress) as progress:
            task_id = progress.add_task("Extracting context", total=len(entries))
            futures = [executor.submit(work, entry) for entry in entries]
            for future in as_completed(futures):
                future.result()
                progress.advance(task_id)
    except KeyboardInterrupt:
        logger.warning("Interrupted, cancelled pending entries; waiting for in-flight requests to finish")
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return results, errors


class ExtractionProcessor(Processor):
    """Builds the search session, cache and client, then runs the worker pool."""

    def __init__(self, *, show_progress: bool = True) -> None:
        """Initialize the processor."""
        self.show_progress = show_progress

    def process(self, context: ExecutionContext) -> None:
        """Fill `context.results` and `context.errors`."""
        if context.is_finished:
            return
        if context.is_dry_run:
            logger.debug("[DRY RUN] Skipping extraction.")
            return

        config = context.config
        if context.searcher is None:
            context.searcher = Searcher(
                source_paths=config.source_paths,
                ignore_patterns=config.ignore_patterns,
                context_lines=config.context_lines,
                platform=config.platform,
                translation_paths=config.translations,
            )
        if context.cache is None:
            context.cache = ContextCache(enabled=not config.no_cache)
        if context.client is None:
            context.client = create_client(config.provider, config.custom_prompt)

        extractor = EntryExtractor(
            context.searcher,
            context.client,
            context.cache,
            max_matches_per_key=config.max_matches_per_key,
            model=config.model,
            llm_gate=threading.BoundedSemaphore(config.concurrency),
        )
        logger.info("Processing %d entries with concurrency %d.", len(context.entries), config.concurrency)
        context.results, context.errors = run_entries(
            context.entries,
            extractor,
            config.concurrency,
            show_progress=self.show_progress,
        )
