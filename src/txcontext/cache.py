"""Content-addressed cache of extraction results."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from . import paths
from .utils.hashing import entry_checksum

__all__ = ["ContextCache"]

logger = logging.getLogger(__name__)


class ContextCache:
    """
    Stores one JSON record per (key, text) pair.

    Each record lives in its own file named by the SHA-256 of "key:text", so
    concurrent workers never write the same slot for different entries and a
    changed source text naturally misses. Read and write failures are logged
    and treated as a miss; they never interrupt a run.
    """

    def __init__(self, *, enabled: bool = True, cache_dir: Path | None = None) -> None:
        """
        Initialize the cache.

        Args:
            enabled: When False every operation is a no-op.
            cache_dir: Directory holding the records. Defaults to '.txcontext-cache' in the CWD.

        """
        self.enabled = enabled
        self.cache_dir = cache_dir or paths.get_cache_dir()
        if self.enabled:
            try:
                paths.ensure_dir_exists(self.cache_dir)
            except OSError as e:
                logger.warning("Could not create cache directory %s: %s", self.cache_dir, e)

    def _slot_path(self, key: str, text: str) -> Path:
        return self.cache_dir / f"{entry_checksum(key, text)}.json"

    def get(self, key: str, text: str) -> dict[str, Any] | None:
        """Return the cached record for the pair, or None on a miss."""
        if not self.enabled:
            return None

        slot = self._slot_path(key, text)
        if not slot.exists():
            return None
        try:
            with slot.open("rb") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Cache read error for '%s': %s", key, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Cache record for '%s' is not an object, ignoring it.", key)
            return None
        logger.debug("[CACHE HIT] %s", key)
        return data

    def set(self, key: str, text: str, record: dict[str, Any]) -> None:
        """Store a record for the pair, overwriting any previous one."""
        if not self.enabled:
            return

        slot = self._slot_path(key, text)
        try:
            slot.parent.mkdir(parents=True, exist_ok=True)
            with slot.open("w", encoding="utf-8") as f:
                json.dump(record, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Cache write error for '%s': %s", key, e)

    def clear(self) -> None:
        """Remove the cache directory and everything in it."""
        if self.cache_dir.is_dir():
            shutil.rmtree(self.cache_dir)
            logger.info("Removed cache directory %s", self.cache_dir)
