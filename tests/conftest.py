"""Shared fixtures for osv-policy tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_config():
    """Write an osv-scanner.toml into a directory and return its path."""

    def _write(directory: Path, content: str) -> Path:
        config_file = directory / "osv-scanner.toml"
        config_file.write_text(content, encoding="utf-8")
        return config_file

    return _write
