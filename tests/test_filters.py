"""Tests for match de-duplication and false-positive filtering."""

import unittest
from pathlib import Path

from txcontext.search.filters import filter_matches, is_false_positive, is_translation_file
from txcontext.types import Match


class TestIsFalsePositive(unittest.TestCase):
    """Test suite for the line-shape heuristics."""

    def test_comparisons_are_false_positives(self) -> None:
        """1. Comparisons: Equality checks against string literals."""
        assert is_false_positive('if key == "common.save" {')
        assert is_false_positive('if "common.save" != key {')

    def test_equals_calls_are_false_positives(self) -> None:
        """2. Equals: Java and Kotlin literal comparisons."""
        assert is_false_positive('if (action.equals("common.save")) {')
        assert is_false_positive('name.contentEquals("common.save")')

    def test_empty_argument_calls_are_false_positives(self) -> None:
        """3. Method Calls: Lines with empty-argument method calls."""
        assert is_false_positive("preferences.edit().clear()")

    def test_localization_calls_are_kept(self) -> None:
        """4. Real Usage: Plain localization calls pass."""
        assert not is_false_positive('title = NSLocalizedString("common.save", comment: "")')
        assert not is_false_positive("button.setText(R.string.common_save)")

    def test_empty_line(self) -> None:
        """5. Edge Case: An empty line is never a false positive."""
        assert not is_false_positive("")


class TestIsTranslationFile(unittest.TestCase):
    """Test suite for translation-definition detection."""

    def test_apple_string_tables(self) -> None:
        """1. iOS: .strings and .stringsdict files."""
        assert is_translation_file("App/en.lproj/Localizable.strings")
        assert is_translation_file("App/en.lproj/Localizable.stringsdict")

    def test_android_value_resources(self) -> None:
        """2. Android: strings.xml and values* resource XML."""
        assert is_translation_file("app/src/main/res/values-fr/strings.xml")
        assert is_translation_file("app/src/main/res/values/arrays.xml")

    def test_layouts_are_usages(self) -> None:
        """3. Layouts: Layout XML is a usage site, not a definition."""
        assert not is_translation_file("app/src/main/res/layout/activity_main.xml")
        assert not is_translation_file("app/src/main/java/Main.kt")

    def test_configured_translation_paths(self) -> None:
        """4. Configured Paths: Explicit translation files are excluded."""
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            custom = Path(tmp) / "copy.json"
            custom.write_text("{}", encoding="utf-8")
            assert is_translation_file(str(custom), [custom.resolve()])
            assert not is_translation_file(str(custom), [])


def test_filter_matches_deduplicates_by_location() -> None:
    """Only the first match per (file, line) survives."""
    first = Match(file="a.swift", line=3, match_line='NSLocalizedString("k", comment: "")')
    duplicate = Match(file="a.swift", line=3, match_line='NSLocalizedString("k", comment: "")', context="other")
    other = Match(file="a.swift", line=9, match_line='Text("k")')

    assert filter_matches([first, duplicate, other]) == [first, other]


def test_filter_matches_drops_false_positives_and_definitions() -> None:
    """False-positive lines and hits inside translation files are removed."""
    keep = Match(file="View.swift", line=1, match_line='Text("k")')
    comparison = Match(file="View.swift", line=2, match_line='if key == "k" {')
    definition = Match(file="en.lproj/Localizable.strings", line=1, match_line='"k" = "K";')

    assert filter_matches([keep, comparison, definition]) == [keep]
