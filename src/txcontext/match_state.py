"""
Entry lifecycle state management for txcontext.

Each translation entry moves through a small state machine while the
extraction pipeline processes it:

    PENDING → CACHE_CHECK → {CACHED | SEARCHING} → {NO_USAGE | MATCHED}
    → {LLM_CALL → DONE} | DONE

The sentinel descriptions below mark results that carry no translator value.
Write-back engines never copy them into files.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class EntryLifecycle(str, Enum):
    """The lifecycle state of a translation entry in the extraction pipeline."""

    PENDING = "pending"
    """Entry was queued but no worker has picked it up yet."""

    CACHE_CHECK = "cache_check"
    """The cache is being consulted for a previous result."""

    CACHED = "cached"
    """A previous result was found in the cache and reused."""

    SEARCHING = "searching"
    """Source code is being searched for usages of the key."""

    NO_USAGE = "no_usage"
    """The search returned no usages."""

    MATCHED = "matched"
    """The search returned at least one usage."""

    LLM_CALL = "llm_call"
    """The language model is summarizing the usages."""

    DONE = "done"
    """A result has been produced."""


NO_USAGE_DESCRIPTION: Final[str] = "No usage found in source code"
PROCESSING_FAILED_DESCRIPTION: Final[str] = "Processing failed"

SENTINEL_MARKERS: Final[tuple[str, ...]] = ("No usage found", PROCESSING_FAILED_DESCRIPTION)
