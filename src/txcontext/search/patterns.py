"""Generates platform-specific search patterns for localization call sites."""

import logging
import os
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Final

import regex

__all__ = [
    "ANDROID_EXTENSIONS",
    "IOS_EXTENSIONS",
    "PLATFORM_EXTENSIONS",
    "Platform",
    "build_android_patterns",
    "build_ios_patterns",
    "build_search_patterns",
    "compile_patterns",
    "detect_platform",
]

logger = logging.getLogger(__name__)


class Platform(str, Enum):
    """Enumeration of the source platforms the searcher understands."""

    IOS = "ios"
    ANDROID = "android"
    UNKNOWN = "unknown"


IOS_EXTENSIONS: Final[frozenset[str]] = frozenset({".swift", ".m", ".mm", ".h"})
ANDROID_EXTENSIONS: Final[frozenset[str]] = frozenset({".kt", ".java", ".xml"})

PLATFORM_EXTENSIONS: Final[dict[Platform, frozenset[str]]] = {
    Platform.IOS: IOS_EXTENSIONS,
    Platform.ANDROID: ANDROID_EXTENSIONS,
    Platform.UNKNOWN: IOS_EXTENSIONS | ANDROID_EXTENSIONS,
}

# Suffixes that decide the platform when a source root is a single file.
_IOS_FILE_SUFFIXES: Final[tuple[str, ...]] = (".swift", ".m", ".mm")
_ANDROID_FILE_SUFFIXES: Final[tuple[str, ...]] = (".kt", ".java")

_QUOTE: Final[str] = "[\"']"


def build_ios_patterns(key: str) -> list[str]:
    """Return patterns for the idiomatic iOS localization call shapes."""
    escaped = regex.escape(key)
    return [
        # NSLocalizedString("key", comment: "...") and Objective-C @"key"
        rf"NSLocalizedString\s*\(\s*@?{_QUOTE}{escaped}{_QUOTE}",
        # String(localized: "key")
        rf"String\s*\(\s*localized:\s*{_QUOTE}{escaped}{_QUOTE}",
        # LocalizedStringKey("key")
        rf"LocalizedStringKey\s*\(\s*{_QUOTE}{escaped}{_QUOTE}",
        # Text("key")
        rf"Text\s*\(\s*{_QUOTE}{escaped}{_QUOTE}",
        # "key".localized
        rf"{_QUOTE}{escaped}{_QUOTE}\s*\.localized",
    ]


def build_android_patterns(key: str) -> list[str]:
    """Return patterns for the idiomatic Android string resource shapes."""
    escaped = regex.escape(key)
    return [
        # R.string.key, or string.key with a static import of R.string
        rf"(?:\bR\s*\.\s*|(?<![\w.]))string\s*\.\s*{escaped}\b",
        # @string/key in layout and resource XML
        rf"@string/{escaped}\b",
        # getString(R.string.key)
        rf"getString\s*\(\s*R\s*\.\s*string\s*\.\s*{escaped}\b",
        # context.getString(R.string.key)
        rf"\.\s*getString\s*\(\s*R\s*\.\s*string\s*\.\s*{escaped}\b",
        # stringResource(R.string.key) in Jetpack Compose
        rf"stringResource\s*\(\s*R\s*\.\s*string\s*\.\s*{escaped}\b",
    ]


def build_search_patterns(key: str, platform: Platform) -> list[str]:
    """
    Build the ordered list of search patterns for a key on a platform.

    When the platform is unknown, both platform sets are returned followed by
    a bare literal match on the key, so nothing is dropped silently.

    Args:
        key: The translation key to search for.
        platform: The detected or configured platform.

    Returns:
        A list of regular expression strings.

    """
    if platform == Platform.IOS:
        return build_ios_patterns(key)
    if platform == Platform.ANDROID:
        return build_android_patterns(key)
    return [*build_ios_patterns(key), *build_android_patterns(key), regex.escape(key)]


def compile_patterns(patterns: Iterable[str]) -> list[regex.Pattern]:
    """Compile pattern strings, skipping (and logging) any that are invalid."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(regex.compile(pattern))
        except regex.error as e:
            logger.warning("Skipping invalid search pattern '%s': %s", pattern, e)
    return compiled


def _tree_has_suffix(root: Path, suffix: str) -> bool:
    """Return True as soon as any file under root carries the suffix."""
    for _dirpath, _dirnames, filenames in os.walk(root):
        if any(name.endswith(suffix) for name in filenames):
            return True
    return False


def detect_platform(source_paths: Iterable[str | Path]) -> Platform:
    """
    Detect the platform from the configured source roots.

    Roots are checked in order and the first decisive root wins. A directory
    containing Swift files is iOS; otherwise one containing Kotlin files is
    Android. A single-file root is classified by its suffix.

    Returns:
        The detected platform, or Platform.UNKNOWN when nothing is decisive.

    """
    for raw_path in source_paths:
        path = Path(raw_path)
        if not path.exists():
            logger.debug("Skipping missing source path during platform detection: %s", path)
            continue

        if path.is_dir():
            if _tree_has_suffix(path, ".swift"):
                return Platform.IOS
            if _tree_has_suffix(path, ".kt"):
                return Platform.ANDROID
        elif path.name.endswith(_IOS_FILE_SUFFIXES):
            return Platform.IOS
        elif path.name.endswith(_ANDROID_FILE_SUFFIXES):
            return Platform.ANDROID

    return Platform.UNKNOWN
