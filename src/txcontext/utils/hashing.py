"""Hashing helpers for content-addressed storage."""

import hashlib

__all__ = ["calculate_checksum", "entry_checksum"]


def calculate_checksum(text: str) -> str:
    """Calculate the SHA-256 checksum of a given text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def entry_checksum(key: str, text: str) -> str:
    """
    Return the checksum identifying a (key, text) pair.

    Both parts are hashed so that a changed source text invalidates the
    cached context for its key.
    """
    return calculate_checksum(f"{key}:{text}")
