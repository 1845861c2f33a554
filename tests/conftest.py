"""Shared fixtures for the txcontext test suite."""

from pathlib import Path

import pytest

from fakes import IosApp, create_ios_app


@pytest.fixture
def ios_app(tmp_path: Path) -> IosApp:
    """Create a small iOS project in a temporary directory."""
    return create_ios_app(tmp_path)
