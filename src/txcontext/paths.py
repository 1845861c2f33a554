"""Manages the fixed paths used by txcontext."""
# src/txcontext/paths.py

from pathlib import Path
from typing import Final

CONFIG_FILE_NAMES: Final[list[str]] = ["txcontext.yml", "txcontext.yaml"]
CACHE_DIR_NAME: Final[str] = ".txcontext-cache"


def find_config_file(root_path: Path | None = None) -> Path | None:
    """
    Return the first default config file found in root_path (or CWD).

    Returns:
        The config file path, or None if no default config file exists.

    """
    root = (root_path or Path.cwd()).resolve()
    for name in CONFIG_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def get_cache_dir(root_path: Path | None = None) -> Path:
    """Return the path to the cache directory."""
    return (root_path or Path.cwd()) / CACHE_DIR_NAME


def get_log_dir(root_path: Path | None = None) -> Path:
    """Return the path to the log directory."""
    return get_cache_dir(root_path) / "logs"


def ensure_dir_exists(path: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
