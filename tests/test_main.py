"""Tests for the main CLI entry point."""

import unittest
from argparse import Namespace
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from txcontext import __version__
from txcontext.__main__ import _parse_args, main
from txcontext.errors import ConfigError

from fakes import IosApp


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[None]:
    """Keep the test runner's log capture in place."""
    with patch("txcontext.__main__.setup_logging"):
        yield


class TestParseArgs(unittest.TestCase):
    """Test suite for CLI argument parsing."""

    def test_extract_is_the_default_command(self) -> None:
        """1. Default Command: 'extract' is implied, options default to None."""
        args = _parse_args([])
        assert isinstance(args, Namespace)
        assert args.command == "extract"
        assert args.translations is None
        assert args.dry_run is False
        assert args.context_prefix is None

    def test_extract_options(self) -> None:
        """2. Extract Options: Short and long forms are parsed."""
        args = _parse_args(["-t", "a.strings,b.xml", "-s", "ios", "-p", "openai", "-k", "settings.*", "--concurrency", "3", "--write-back", "--context-prefix", ""])
        assert args.command == "extract"
        assert args.translations == "a.strings,b.xml"
        assert args.provider == "openai"
        assert args.keys == "settings.*"
        assert args.concurrency == 3
        assert args.write_back is True
        assert args.context_prefix == ""

    def test_subcommands(self) -> None:
        """3. Subcommands: init, clear-cache and version are recognized."""
        assert _parse_args(["init", "--force"]).force is True
        assert _parse_args(["clear-cache"]).command == "clear-cache"
        assert _parse_args(["version"]).command == "version"

    def test_invalid_choice(self) -> None:
        """4. Validation: Unknown providers are rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            _parse_args(["-p", "llama"])
        assert exc_info.value.code == 2

    def test_version_flag(self) -> None:
        """5. Version Flag: --version prints and exits successfully."""
        with pytest.raises(SystemExit) as exc_info:
            _parse_args(["--version"])
        assert exc_info.value.code == 0


def test_version_command(capsys: pytest.CaptureFixture[str]) -> None:
    """'version' prints the installed version."""
    main(["version"])
    assert capsys.readouterr().out.strip() == f"txcontext {__version__}"


def test_extract_requires_translations(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    """Without a config file, --translations is mandatory."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "--translations (-t) is required unless using a config file" in caplog.text


def test_init_writes_sample_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """'init' refuses to overwrite unless forced."""
    monkeypatch.chdir(tmp_path)
    main(["init"])
    config_file = tmp_path / "txcontext.yml"
    assert "translations:" in config_file.read_text(encoding="utf-8")

    config_file.write_text("custom", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["init"])
    assert exc_info.value.code == 1
    assert config_file.read_text(encoding="utf-8") == "custom"

    main(["init", "--force"])
    assert "translations:" in config_file.read_text(encoding="utf-8")


def test_clear_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """'clear-cache' removes the cache directory of the current directory."""
    monkeypatch.chdir(tmp_path)
    cache_dir = tmp_path / ".txcontext-cache"
    (cache_dir / "logs").mkdir(parents=True)
    (cache_dir / "abc.json").write_text("{}", encoding="utf-8")

    main(["clear-cache"])
    assert not cache_dir.exists()
    main(["clear-cache"])


@pytest.mark.integration
def test_extract_with_mock_provider(ios_app: IosApp, monkeypatch: pytest.MonkeyPatch) -> None:
    """A full run from the command line writes the CSV output."""
    monkeypatch.chdir(ios_app.root)
    main(["-t", str(ios_app.strings_file), "-s", str(ios_app.source_dir), "-p", "mock", "-o", "context.csv"])

    content = (ios_app.root / "context.csv").read_text(encoding="utf-8")
    assert content.startswith("key,text,description,ui_element,tone,max_length,locations,error")
    assert "[MOCK]" in content


@pytest.mark.integration
def test_extract_discovers_config_file(ios_app: IosApp, monkeypatch: pytest.MonkeyPatch) -> None:
    """A txcontext.yml in the current directory is used automatically."""
    monkeypatch.chdir(ios_app.root)
    (ios_app.root / "txcontext.yml").write_text(
        f"translations:\n  - path: {ios_app.strings_file}\n"
        f"source:\n  paths: [{ios_app.source_dir}]\n"
        "llm:\n  provider: mock\n"
        "output:\n  format: json\n  path: context.json\n",
        encoding="utf-8",
    )
    main(["extract"])

    assert (ios_app.root / "context.json").is_file()


def test_missing_api_key_exits_with_error(ios_app: IosApp, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    """Configuration errors are reported and exit with status 1."""
    monkeypatch.chdir(ios_app.root)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        main(["-t", str(ios_app.strings_file), "-p", "openai"])
    assert exc_info.value.code == 1
    assert "OPENAI_API_KEY environment variable is required" in caplog.text


@pytest.mark.parametrize(
    ("error", "exit_code"),
    [(KeyboardInterrupt(), 130), (ConfigError("bad config"), 1), (RuntimeError("boom"), 1)],
)
def test_exit_codes(ios_app: IosApp, monkeypatch: pytest.MonkeyPatch, error: BaseException, exit_code: int) -> None:
    """Interrupts exit with 130; configuration and unexpected errors with 1."""
    monkeypatch.chdir(ios_app.root)
    with patch("txcontext.__main__.run_extraction", side_effect=error) as mock_run, pytest.raises(SystemExit) as exc_info:
        main(["-t", str(ios_app.strings_file)])
    assert exc_info.value.code == exit_code
    mock_run.assert_called_once()
