"""Small helpers shared across txcontext."""

from .hashing import calculate_checksum, entry_checksum
from .text import truncate

__all__ = ["calculate_checksum", "entry_checksum", "truncate"]
