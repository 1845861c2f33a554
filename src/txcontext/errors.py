"""Typed errors raised by txcontext."""

__all__ = ["ConfigError", "TranslationParseError", "TxContextError", "UnsupportedFormatError"]


class TxContextError(Exception):
    """Base class for all errors raised by txcontext."""


class ConfigError(TxContextError, ValueError):
    """Raised when the configuration is missing, malformed, or invalid."""


class UnsupportedFormatError(TxContextError, ValueError):
    """Raised when a translation file has a format no parser understands."""


class TranslationParseError(TxContextError, ValueError):
    """Raised when a translation file cannot be read or parsed."""
