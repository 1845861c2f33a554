"""Text formatting helpers."""

__all__ = ["truncate"]


def truncate(text: str, length: int, suffix: str = "...") -> str:
    """
    Shorten text to at most `length` characters.

    Text that already fits is returned unchanged. Otherwise it is cut so that
    the result, including the suffix, is exactly `length` characters long.
    """
    if text is None:
        return ""
    if len(text) <= length:
        return text
    if length <= len(suffix):
        return text[:length]
    return text[: length - len(suffix)] + suffix
