"""Handles loading and validation of the txcontext configuration."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .llm.base import Provider
from .search.patterns import Platform

__all__ = [
    "DEFAULT_CONTEXT_PREFIX",
    "DEFAULT_SWIFT_FUNCTIONS",
    "SAMPLE_CONFIG_YAML",
    "TxContextConfig",
    "default_ignore_patterns",
    "load_config",
]

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_PREFIX: Final[str] = "Context: "
DEFAULT_OUTPUT_PATH: Final[str] = "translation-context.csv"
DEFAULT_SWIFT_FUNCTIONS: Final[tuple[str, ...]] = ("NSLocalizedString", "String(localized:", "Text(")

# Maps CLI option names to the config fields they override.
_CLI_OVERRIDES: Final[dict[str, str]] = {
    "provider": "provider",
    "model": "model",
    "concurrency": "concurrency",
    "platform": "platform",
    "output": "output_path",
    "format": "output_format",
    "keys": "key_filter",
    "diff_base": "diff_base",
    "context_prefix": "context_prefix",
    "context_mode": "context_mode",
}
_CLI_FLAGS: Final[tuple[str, ...]] = ("no_cache", "dry_run", "write_back", "write_back_to_code")


def default_ignore_patterns() -> list[str]:
    """Return the ignore globs used when none are configured."""
    return [
        "**/node_modules/**",
        "**/vendor/**",
        "**/.git/**",
        "**/build/**",
        "**/dist/**",
        "**/*.min.js",
        "**/*.test.*",
        "**/*.spec.*",
    ]


def _split_csv(value: str | None) -> list[str]:
    """Split a comma-separated CLI value, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_translations(raw: Any) -> list[str]:  # noqa: ANN401
    """Accept translation entries written either as plain paths or as `{path: ...}` mappings."""
    if not raw:
        return []
    if isinstance(raw, str):
        return [raw]
    translations = []
    for item in raw:
        if isinstance(item, Mapping):
            path = item.get("path")
            if path:
                translations.append(str(path))
        elif item:
            translations.append(str(item))
    return translations


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    return value if isinstance(value, Mapping) else {}


class TxContextConfig(BaseModel):
    """The resolved configuration for one run. Read-only once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    translations: list[str] = Field(default_factory=list)
    source_paths: list[str] = Field(default_factory=lambda: ["."])
    ignore_patterns: list[str] = Field(default_factory=list)
    provider: Provider = Provider.ANTHROPIC
    model: str | None = None
    concurrency: int = Field(default=5, ge=1)
    context_lines: int = Field(default=20, ge=0)
    max_matches_per_key: int = Field(default=3, ge=1)
    platform: Platform | None = None
    output_path: str = DEFAULT_OUTPUT_PATH
    output_format: Literal["csv", "json"] = "csv"
    no_cache: bool = False
    dry_run: bool = False
    key_filter: str | None = None
    custom_prompt: str | None = None
    write_back: bool = False
    write_back_to_code: bool = False
    swift_functions: list[str] = Field(default_factory=lambda: list(DEFAULT_SWIFT_FUNCTIONS))
    diff_base: str | None = None
    context_prefix: str = DEFAULT_CONTEXT_PREFIX
    context_mode: Literal["replace", "append"] = "replace"

    @classmethod
    def _build(cls, values: dict[str, Any]) -> "TxContextConfig":
        """Validate field values, dropping unset ones so that defaults apply."""
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e

    @classmethod
    def from_file(cls, path: str | Path) -> "TxContextConfig":
        """
        Load the configuration from a YAML file.

        Args:
            path: Path to the config file (usually 'txcontext.yml').

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or fails validation.

        """
        config_path = Path(path)
        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            msg = f"Could not read config file {config_path}: {e}"
            raise ConfigError(msg) from e
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in config file {config_path}: {e}"
            raise ConfigError(msg) from e

        if not isinstance(data, Mapping):
            msg = f"Config file {config_path} must contain a mapping at the top level."
            raise ConfigError(msg)

        source = _section(data, "source")
        llm = _section(data, "llm")
        processing = _section(data, "processing")
        output = _section(data, "output")
        swift = _section(data, "swift")

        ignore = source.get("ignore")
        logger.debug("Loaded configuration file %s", config_path)
        return cls._build(
            {
                "translations": _parse_translations(data.get("translations")),
                "source_paths": source.get("paths"),
                "ignore_patterns": default_ignore_patterns() if ignore is None else list(ignore),
                "provider": llm.get("provider"),
                "model": llm.get("model"),
                "concurrency": processing.get("concurrency"),
                "context_lines": processing.get("context_lines"),
                "max_matches_per_key": processing.get("max_matches_per_key"),
                "platform": processing.get("platform"),
                "output_path": output.get("path"),
                "output_format": output.get("format"),
                "write_back": output.get("write_back"),
                "write_back_to_code": output.get("write_back_to_code"),
                "context_prefix": output.get("context_prefix"),
                "context_mode": output.get("context_mode"),
                "swift_functions": swift.get("functions"),
                "custom_prompt": data.get("prompt"),
            }
        )

    @classmethod
    def from_cli(cls, options: Mapping[str, Any]) -> "TxContextConfig":
        """Build the configuration from command-line options alone."""
        values: dict[str, Any] = {
            "translations": _split_csv(options.get("translations")),
            "source_paths": _split_csv(options.get("source")) or None,
            "ignore_patterns": default_ignore_patterns(),
        }
        for option, field_name in _CLI_OVERRIDES.items():
            values[field_name] = options.get(option)
        for flag in _CLI_FLAGS:
            values[flag] = bool(options.get(flag))
        return cls._build(values)

    def merge_cli(self, options: Mapping[str, Any]) -> "TxContextConfig":
        """
        Return a copy with the command-line options that were given applied on top.

        Options left unset (None, or False for flags) keep the file's values.
        An empty --context-prefix is a real value and does override.
        """
        updates: dict[str, Any] = {}
        for option, field_name in _CLI_OVERRIDES.items():
            value = options.get(option)
            if value is not None:
                updates[field_name] = value
        for flag in _CLI_FLAGS:
            if options.get(flag):
                updates[flag] = True
        if options.get("translations"):
            updates["translations"] = _split_csv(options["translations"])
        if options.get("source"):
            updates["source_paths"] = _split_csv(options["source"])

        if not updates:
            return self
        return self._build({**self.model_dump(), **updates})


def load_config(options: Mapping[str, Any]) -> TxContextConfig:
    """
    Resolve the configuration for a run.

    A config file given with --config is used when it exists, with any CLI
    options applied on top. Otherwise the configuration comes from the CLI.
    """
    config_path = options.get("config")
    if config_path and Path(config_path).is_file():
        logger.info("Loading configuration from: %s", config_path)
        return TxContextConfig.from_file(config_path).merge_cli(options)
    if config_path:
        logger.warning("Config file not found: %s. Using command-line options.", config_path)
    return TxContextConfig.from_cli(options)


SAMPLE_CONFIG_YAML: Final[str] = """\
# txcontext configuration
# Extract translation context from mobile app source code

# Translation files to process
# Supported formats: .strings (iOS), strings.xml (Android), .json, .yml
translations:
  # iOS example
  - path: ios/MyApp/Resources/Localizable.strings

  # Android example
  # - path: android/app/src/main/res/values/strings.xml

# Source code directories to search
source:
  paths:
    - ios/MyApp/
    # - android/app/src/main/java/
  ignore:
    - "**/Pods/**"
    - "**/build/**"
    - "**/*.generated.*"
    - "**/*Tests*"

# LLM configuration
llm:
  # anthropic, openai, gemini or mock
  provider: anthropic
  model: claude-sonnet-4-20250514
  # The API key is read from ANTHROPIC_API_KEY (OPENAI_API_KEY, GEMINI_API_KEY)

# Processing options
processing:
  concurrency: 5
  context_lines: 20
  max_matches_per_key: 3
  # ios, android or unknown. Detected from the source paths when omitted.
  # platform: ios

# Output configuration
output:
  format: csv
  path: translation-context.csv
  # Write context comments back to translation files (.strings, strings.xml)
  write_back: false
  # Write context back to Swift source code comment: parameters
  write_back_to_code: false
  # Prefix for context comments (use an empty string for no prefix)
  # context_prefix: "Context: "
  # How to handle existing comments: "replace" or "append"
  # context_mode: replace

# Swift-specific configuration for write_back_to_code
swift:
  # Localization functions to update (default shown)
  functions:
    - NSLocalizedString
    - "String(localized:"
    - "Text("
    # Add custom functions like:
    # - "MyLocalizedString("

# Extra instructions appended to every prompt
# prompt: |
#   This is a banking app. Mention when a string appears on a payment screen.
"""
