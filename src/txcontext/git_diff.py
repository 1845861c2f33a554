"""Finds translation keys added or modified on the current branch."""

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import Final

import regex

__all__ = ["GitDiff"]

logger = logging.getLogger(__name__)

_STRINGS_KEY_PATTERN: Final = regex.compile(r'^\+\s*"([^"]+)"\s*=')
_XML_KEY_PATTERNS: Final = (
    regex.compile(r"^\+.*<string\s+name=[\"']([^\"']+)[\"']"),
    regex.compile(r"^\+.*<string-array\s+name=[\"']([^\"']+)[\"']"),
    regex.compile(r"^\+.*<plurals\s+name=[\"']([^\"']+)[\"']"),
)


def _added_lines(diff_output: str) -> Iterable[str]:
    """Yield the lines of a diff that were added, skipping the '+++' file header."""
    for line in diff_output.splitlines():
        if line.startswith("+") and not line.startswith("++"):
            yield line


def extract_strings_keys(diff_output: str) -> set[str]:
    """Extract keys from added `"key" = "value";` lines of a .strings diff."""
    keys = set()
    for line in _added_lines(diff_output):
        match = _STRINGS_KEY_PATTERN.match(line)
        if match:
            keys.add(match.group(1))
    return keys


def extract_xml_keys(diff_output: str) -> set[str]:
    """Extract string, string-array and plurals names from added lines of an XML diff."""
    keys = set()
    for line in _added_lines(diff_output):
        for pattern in _XML_KEY_PATTERNS:
            match = pattern.match(line)
            if match:
                keys.add(match.group(1))
    return keys


class GitDiff:
    """Reads `git diff <base>...HEAD` for translation files."""

    def __init__(self, base_ref: str = "main", cwd: Path | None = None) -> None:
        """
        Initialize the diff reader.

        Args:
            base_ref: The ref the current branch diverged from, e.g. 'origin/main'.
            cwd: Working directory for git commands. Defaults to the CWD.

        """
        self.base_ref = base_ref
        self.cwd = cwd

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(  # noqa: S603
            ["git", *args],  # noqa: S607
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=False,
        )

    def available(self) -> bool:
        """Return True if the working directory is inside a git repository."""
        try:
            return self._git("rev-parse", "--git-dir").returncode == 0
        except OSError:
            return False

    def base_ref_exists(self) -> bool:
        """Return True if the base ref resolves to a commit."""
        try:
            return self._git("rev-parse", "--verify", "--quiet", self.base_ref).returncode == 0
        except OSError:
            return False

    def diff_for_file(self, path: str | Path) -> str:
        """Return the triple-dot diff of one file, or '' if git fails."""
        try:
            result = self._git("diff", f"{self.base_ref}...HEAD", "--", str(path))
        except OSError as e:
            logger.warning("Could not run git diff for %s: %s", path, e)
            return ""
        if result.returncode != 0:
            logger.debug("git diff failed for %s: %s", path, result.stderr.strip())
            return ""
        return result.stdout

    def changed_keys(self, translation_paths: Iterable[str | Path]) -> set[str]:
        """
        Collect keys added or modified since the base ref.

        Files that do not exist, and formats without a diff extractor, are skipped.

        Returns:
            The set of changed keys. Empty means there is nothing to process.

        """
        keys: set[str] = set()
        for raw_path in translation_paths:
            path = Path(raw_path)
            if not path.exists():
                continue

            diff_output = self.diff_for_file(path)
            if not diff_output:
                continue

            suffix = path.suffix.lower()
            if suffix == ".strings":
                keys |= extract_strings_keys(diff_output)
            elif suffix == ".xml":
                keys |= extract_xml_keys(diff_output)

        logger.debug("Found %d changed keys since '%s'.", len(keys), self.base_ref)
        return keys
