"""Main entry point for the txcontext command-line interface."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__, paths
from .cache import ContextCache
from .config import SAMPLE_CONFIG_YAML, load_config
from .errors import TxContextError
from .llm.base import Provider
from .logging_utils import setup_logging
from .search.patterns import Platform
from .workflow import run_extraction

logger = logging.getLogger(__name__)

COMMANDS = ("extract", "init", "clear-cache", "version")
EXIT_INTERRUPTED = 130

EXTRACT_EPILOG = """\
examples:
  # iOS app
  txcontext extract -t ios/Localizable.strings -s ios/

  # Android app
  txcontext extract -t android/res/values/strings.xml -s android/app/

  # Write context back to source files
  txcontext extract -t Localizable.strings -s . --write-back

  # Use a config file
  txcontext extract --config txcontext.yml
"""


def _add_extract_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options of the 'extract' command."""
    parser.add_argument("-c", "--config", help="Path to config file (txcontext.yml).")
    parser.add_argument("-t", "--translations", help="Translation file(s), comma-separated.")
    parser.add_argument("-s", "--source", help="Source directory(ies) to search, comma-separated.")
    parser.add_argument("-o", "--output", help="Output file path (default: translation-context.csv).")
    parser.add_argument("-f", "--format", choices=["csv", "json"], help="Output format (default: csv).")
    parser.add_argument("-p", "--provider", choices=[p.value for p in Provider], help="LLM provider (default: anthropic).")
    parser.add_argument("-m", "--model", help="LLM model to use.")
    parser.add_argument("-k", "--keys", help="Filter keys (comma-separated patterns, supports * wildcard).")
    parser.add_argument("--concurrency", type=int, help="Number of concurrent requests (default: 5).")
    parser.add_argument("--platform", choices=[p.value for p in Platform], help="Source platform. Detected when omitted.")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be processed without calling the LLM.")
    parser.add_argument("--no-cache", action="store_true", help="Disable caching.")
    parser.add_argument("--write-back", action="store_true", help="Write context back to translation files (.strings, strings.xml).")
    parser.add_argument("--write-back-to-code", action="store_true", help="Write context back to Swift comment: arguments.")
    parser.add_argument("--diff-base", help="Only process keys changed since this git ref (e.g. main, origin/main).")
    parser.add_argument("--context-prefix", help="Prefix for context comments (use '' for no prefix).")
    parser.add_argument("--context-mode", choices=["replace", "append"], help="How to handle existing comments (default: replace).")
    parser.add_argument("--debug", action="store_true", help="Enable debug level logging.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="txcontext", description="Extract translation context from mobile app source code.")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"txcontext {__version__}",
        help="Show the version number and exit.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract translation context from source code (default).",
        epilog=EXTRACT_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_extract_arguments(extract_parser)

    init_parser = subparsers.add_parser("init", help="Create a sample txcontext.yml config file.")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing config file.")

    subparsers.add_parser("clear-cache", help="Remove the .txcontext-cache directory.")
    subparsers.add_parser("version", help="Show the version number.")
    return parser


def _parse_args(argv: list[str]) -> argparse.Namespace:
    """
    Parse command-line arguments. 'extract' is implied when no command is given.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "-v", "--version")):
        argv = ["extract", *argv]
    return _build_parser().parse_args(argv)


def _init_config(*, force: bool) -> int:
    """Write the sample config file into the current directory."""
    config_path = Path(paths.CONFIG_FILE_NAMES[0])
    if config_path.exists() and not force:
        logger.error("Config file already exists. Use --force to overwrite.")
        return 1
    try:
        config_path.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    except OSError:
        logger.exception("Failed to write %s", config_path)
        return 1
    logger.info("Created %s", config_path)
    return 0


def _clear_cache() -> int:
    """Remove the cache directory of the current directory."""
    cache = ContextCache(enabled=False)
    if not cache.cache_dir.exists():
        logger.info("No cache to clear.")
        return 0
    try:
        cache.clear()
    except OSError:
        logger.exception("Failed to remove cache directory %s", cache.cache_dir)
        return 1
    return 0


def _extract(options: dict[str, Any]) -> int:
    """Resolve the configuration and run one extraction."""
    if not options.get("config"):
        default_config = paths.find_config_file()
        if default_config is not None:
            options["config"] = str(default_config)

    config_path = options.get("config")
    if not (config_path and Path(config_path).is_file()) and not options.get("translations"):
        logger.error("--translations (-t) is required unless using a config file")
        return 1

    config = load_config(options)
    if not config.translations:
        logger.error("No translation files configured.")
        return 1

    run_extraction(config)
    return 0


def main(argv: list[str] | None = None) -> None:
    """
    Run the main entry point for the txcontext command-line interface.

    Exit status: 0 on success, 1 on configuration or unexpected errors, and
    130 when interrupted.
    """
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    setup_logging(version=__version__, debug=getattr(args, "debug", False))

    try:
        if args.command == "init":
            exit_code = _init_config(force=args.force)
        elif args.command == "clear-cache":
            exit_code = _clear_cache()
        elif args.command == "version":
            print(f"txcontext {__version__}")  # noqa: T201
            exit_code = 0
        else:
            exit_code = _extract(vars(args))
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        sys.exit(EXIT_INTERRUPTED)
    except TxContextError as e:
        logger.error("Error: %s", e)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        logger.exception("An unexpected error occurred")
        logger.critical("An unrecoverable error occurred. Please check the logs for details.")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
