"""Tests for the shared comment resolution policy."""

import unittest

from txcontext.match_state import NO_USAGE_DESCRIPTION, PROCESSING_FAILED_DESCRIPTION
from txcontext.types import ExtractionResult
from txcontext.writers.comment_policy import build_comment, is_sentinel_description, writable_results

PREFIX = "Context: "


class TestBuildComment(unittest.TestCase):
    """Test suite for build_comment."""

    def test_empty_existing_comment(self) -> None:
        """1. Empty Comment: The context line becomes the whole comment."""
        assert build_comment(None, "Screen title.", PREFIX, "replace") == "Context: Screen title."
        assert build_comment("   ", "Screen title.", PREFIX, "append") == "Context: Screen title."

    def test_replace_overwrites_everything(self) -> None:
        """2. Replace Mode: Existing content is discarded."""
        assert build_comment("Old note", "Screen title.", PREFIX, "replace") == "Context: Screen title."

    def test_append_adds_after_existing_content(self) -> None:
        """3. Append Mode: New context follows the developer's note."""
        assert build_comment("Old note", "Screen title.", PREFIX, "append") == "Old note Context: Screen title."

    def test_append_replaces_previous_context(self) -> None:
        """4. Append Mode: A previous context fragment is replaced in place."""
        assert build_comment("Old note Context: stale", "Fresh.", PREFIX, "append") == "Old note Context: Fresh."

    def test_append_only_touches_the_context_line(self) -> None:
        """5. Append Mode: Other lines of a multi-line comment are kept."""
        existing = "Line one\nContext: stale\nLine three"
        assert build_comment(existing, "Fresh.", PREFIX, "append") == "Line one\nContext: Fresh.\nLine three"

    def test_append_is_idempotent(self) -> None:
        """6. Idempotence: Applying the same context twice changes nothing."""
        once = build_comment("Old note", "Screen title.", PREFIX, "append")
        assert build_comment(once, "Screen title.", PREFIX, "append") == once

    def test_append_without_prefix_is_idempotent(self) -> None:
        """7. Empty Prefix: Appending is skipped when the text is already present."""
        once = build_comment("Old note", "Screen title.", "", "append")
        assert once == "Old note Screen title."
        assert build_comment(once, "Screen title.", "", "append") == once

    def test_custom_separator(self) -> None:
        """8. Separator: The separator is placed between old and new content."""
        assert build_comment("Old note", "New.", PREFIX, "append", separator="\n") == "Old note\nContext: New."


class TestSentinels(unittest.TestCase):
    """Test suite for sentinel handling."""

    def test_sentinel_descriptions(self) -> None:
        """1. Sentinels: No-usage, failure and empty descriptions are sentinels."""
        assert is_sentinel_description(NO_USAGE_DESCRIPTION)
        assert is_sentinel_description(PROCESSING_FAILED_DESCRIPTION)
        assert is_sentinel_description("")
        assert is_sentinel_description(None)
        assert not is_sentinel_description("Button label on the login screen.")

    def test_writable_results(self) -> None:
        """2. Filtering: Sentinel and failed results are never written."""
        results = {
            "ok": ExtractionResult(key="ok", text="OK", description="Confirms the dialog."),
            "unused": ExtractionResult(key="unused", text="U", description=NO_USAGE_DESCRIPTION),
            "failed": ExtractionResult(key="failed", text="F", description="API request failed", error="timeout"),
        }
        assert list(writable_results(results)) == ["ok"]
