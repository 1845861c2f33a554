"""Custom logging utilities for the txcontext application."""
# src/txcontext/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path

from . import paths


class _UTCFormatter(logging.Formatter):
    """Formatter that renders timestamps in UTC with microseconds and a 'Z' suffix."""

    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


class ConsoleFormatter(_UTCFormatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The txcontext application version.

        """
        super().__init__(
            fmt=f"%(asctime)s | txcontext - {version} | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )


class FileFormatter(_UTCFormatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__(
            fmt="%(asctime)s | %(name)-28s | %(threadName)-22s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )


def setup_logging(version: str, *, debug: bool = False, log_dir: Path | None = None) -> None:
    """
    Configure the root logger for the txcontext application.

    This function sets up a dual-logging system:
    1.  Console: User-facing messages. Level is INFO by default, DEBUG if debug=True.
    2.  File (DEBUG): Developer-facing, detailed logs written to 'debug.log'
        in the log directory when debug=True.

    Args:
        version: The application version, included in console logs.
        debug: If True, enables detailed file logging and sets console level to DEBUG.
        log_dir: Directory for the debug log file. Defaults to the cache log directory.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    # The SDK clients log every request at INFO.
    for noisy in ("httpx", "openai", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if debug:
        try:
            target_dir = log_dir or paths.get_log_dir()
            paths.ensure_dir_exists(target_dir)
            log_file_path = target_dir / "debug.log"

            file_handler = FileHandler(log_file_path, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger().info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file_path,
            )
        except OSError:
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
