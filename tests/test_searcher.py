"""Integration tests for the usage searcher over small project trees."""

from pathlib import Path
from unittest.mock import patch

import pytest

from txcontext.search import Platform, Searcher
from txcontext.search.discovery import discover_files


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def ios_project(tmp_path: Path) -> Path:
    """Create a small iOS project with one real usage and some noise."""
    _write(
        tmp_path,
        "App/Settings/SettingsViewController.swift",
        'import UIKit\n\nfinal class SettingsViewController {\n    let title = NSLocalizedString("settings.title", comment: "")\n}\n',
    )
    _write(tmp_path, "App/en.lproj/Localizable.strings", '"settings.title" = "Settings";\n')
    _write(tmp_path, "Pods/Lib/Vendored.swift", 'let t = NSLocalizedString("settings.title", comment: "")\n')
    _write(tmp_path, "App/Checks.swift", 'if key == "settings.title" {\n}\n')
    return tmp_path


@pytest.fixture
def android_project(tmp_path: Path) -> Path:
    """Create a small Android project with Kotlin and layout usages."""
    _write(
        tmp_path,
        "app/src/main/java/com/example/SettingsActivity.kt",
        "class SettingsActivity {\n    fun bind() {\n        title = getString(R.string.settings_title)\n    }\n}\n",
    )
    _write(
        tmp_path,
        "app/src/main/res/layout/activity_settings.xml",
        '<TextView\n    android:text="@string/settings_title" />\n',
    )
    _write(
        tmp_path,
        "app/src/main/res/values/strings.xml",
        '<resources>\n    <string name="settings_title">Settings</string>\n</resources>\n',
    )
    return tmp_path


@pytest.mark.integration
def test_ios_search_respects_ignores(ios_project: Path) -> None:
    """Ignored directories and translation files never produce matches."""
    searcher = Searcher([ios_project], ignore_patterns=["**/Pods/**"])

    assert searcher.platform == Platform.IOS
    matches = searcher.search("settings.title")

    assert len(matches) == 1
    assert matches[0].file.endswith("SettingsViewController.swift")
    assert matches[0].line == 4


@pytest.mark.integration
def test_unknown_platform_filters_bare_key_comparisons(ios_project: Path) -> None:
    """The bare-key fallback still drops comparison lines."""
    searcher = Searcher([ios_project], ignore_patterns=["**/Pods/**"], platform="unknown")

    files = {Path(m.file).name for m in searcher.search("settings.title")}
    assert files == {"SettingsViewController.swift"}


@pytest.mark.integration
def test_android_search_finds_code_and_layout_usages(android_project: Path) -> None:
    """Kotlin and layout usages are found in discovery order; strings.xml is excluded."""
    searcher = Searcher([android_project])

    assert searcher.platform == Platform.ANDROID
    matches = searcher.search("settings_title")

    assert [Path(m.file).name for m in matches] == ["SettingsActivity.kt", "activity_settings.xml"]
    assert matches[0].line == 3


def test_missing_key_returns_no_matches(android_project: Path) -> None:
    """A key without usages yields an empty list."""
    assert Searcher([android_project]).search("never_used") == []


def test_files_are_discovered_once(android_project: Path) -> None:
    """The file list is built on the first search and reused afterwards."""
    searcher = Searcher([android_project])
    with patch("txcontext.search.searcher.discover_files", wraps=discover_files) as spy:
        searcher.search("settings_title")
        searcher.search("other_key")
    spy.assert_called_once()


def test_scan_errors_do_not_fail_the_search(android_project: Path) -> None:
    """An I/O error on one file is logged and the search continues."""
    searcher = Searcher([android_project])
    with patch("txcontext.search.searcher.scan_file", side_effect=OSError("device busy")):
        assert searcher.search("settings_title") == []


def test_single_file_roots_are_searched(android_project: Path) -> None:
    """A source path may point at a single file."""
    kotlin = android_project / "app/src/main/java/com/example/SettingsActivity.kt"
    searcher = Searcher([kotlin])

    assert searcher.files == [kotlin]
    assert len(searcher.search("settings_title")) == 1


def test_missing_source_roots_are_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """A source root that does not exist is logged and skipped."""
    searcher = Searcher([tmp_path / "missing"], platform=Platform.IOS)

    assert searcher.files == []
    assert "Source path does not exist" in caplog.text
