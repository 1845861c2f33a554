"""Tests for the logging utilities module."""

import logging
import time
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from txcontext.logging_utils import ConsoleFormatter, FileFormatter, setup_logging


def _record(name: str = "test", level: int = logging.INFO, msg: str = "Test") -> logging.LogRecord:
    return logging.LogRecord(name=name, level=level, pathname="test.py", lineno=42, msg=msg, args=(), exc_info=None)


class TestConsoleFormatter(unittest.TestCase):
    """Test suite for ConsoleFormatter class."""

    def test_console_formatter_includes_version(self) -> None:
        """1. Initialization: Formats records with the application version."""
        formatter = ConsoleFormatter("1.0.0")

        assert formatter.datefmt == "%Y-%m-%dT%H:%M:%S"
        assert formatter.converter == time.gmtime
        formatted = formatter.format(_record(msg="Loaded 3 translation keys"))
        assert "txcontext - 1.0.0" in formatted
        assert formatted.endswith("Loaded 3 translation keys")

    def test_console_formatter_format_time_with_microseconds(self) -> None:
        """2. Time Format: Formats time with 6-digit microseconds and 'Z' suffix."""
        formatter = ConsoleFormatter("1.0.0")
        record = _record()
        record.created = 1234567890.123456

        formatted_time = formatter.formatTime(record, formatter.datefmt)

        assert formatted_time == "2009-02-13T23:31:30.123456Z"


class TestFileFormatter(unittest.TestCase):
    """Test suite for FileFormatter class."""

    def test_file_formatter_detailed_format(self) -> None:
        """1. Detailed Format: Includes logger name, function name, and line number."""
        formatter = FileFormatter()
        record = _record(name="txcontext.search.searcher", level=logging.DEBUG, msg="Detailed log")
        record.funcName = "search"
        record.created = 1234567890.0

        formatted = formatter.format(record)

        assert "txcontext.search.searcher" in formatted
        assert "search" in formatted
        assert "42" in formatted
        assert "DEBUG" in formatted
        assert formatted.endswith("Detailed log")


class TestSetupLogging(unittest.TestCase):
    """Test suite for setup_logging function."""

    def tearDown(self) -> None:
        """Clean up logging state after each test."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)

    def test_setup_logging_default_mode(self) -> None:
        """1. Default Mode: One INFO console handler and no debug file."""
        setup_logging("1.0.0", debug=False)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1
        handler = root_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.level == logging.INFO
        assert isinstance(handler.formatter, ConsoleFormatter)

    def test_setup_logging_quiets_sdk_loggers(self) -> None:
        """2. SDK Loggers: HTTP request logs of the SDKs are raised to WARNING."""
        setup_logging("1.0.0")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("openai").level == logging.WARNING

    def test_setup_logging_debug_mode_writes_file(self) -> None:
        """3. Debug Mode: A debug.log file is written into the log directory."""
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            log_dir = Path(tmp) / "logs"
            setup_logging("1.0.0", debug=True, log_dir=log_dir)

            root_logger = logging.getLogger()
            assert root_logger.level == logging.DEBUG
            file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
            assert len(file_handlers) == 1
            assert isinstance(file_handlers[0].formatter, FileFormatter)
            assert (log_dir / "debug.log").is_file()
            self.tearDown()

    def test_setup_logging_default_log_dir(self) -> None:
        """4. Default Directory: The cache log directory is used when none is given."""
        mock_log_dir = Path("/mock/log/dir")
        with patch("txcontext.logging_utils.paths.get_log_dir", return_value=mock_log_dir), patch("txcontext.logging_utils.paths.ensure_dir_exists") as mock_ensure_dir, patch("txcontext.logging_utils.FileHandler") as mock_file_handler:
            mock_handler_instance = MagicMock()
            mock_handler_instance.level = logging.DEBUG
            mock_file_handler.return_value = mock_handler_instance

            setup_logging("1.0.0", debug=True)

        mock_ensure_dir.assert_called_once_with(mock_log_dir)
        mock_file_handler.assert_called_once_with(mock_log_dir / "debug.log", mode="w", encoding="utf-8")

    def test_setup_logging_debug_file_handler_failure(self) -> None:
        """5. File Handler Failure: Continues with console logging if file creation fails."""
        with patch("txcontext.logging_utils.paths.get_log_dir", side_effect=OSError("Cannot create directory")):
            setup_logging("1.0.0", debug=True)

        console_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler)]
        assert len(console_handlers) == 1

    def test_setup_logging_multiple_calls_idempotent(self) -> None:
        """6. Idempotency: Multiple calls clear old handlers and set up fresh ones."""
        setup_logging("1.0.0", debug=False)
        setup_logging("1.0.0", debug=False)

        assert len(logging.getLogger().handlers) == 1


if __name__ == "__main__":
    unittest.main()
