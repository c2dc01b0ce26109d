"""Pytest configuration and fixtures for fermyonctl tests.

This module provides shared fixtures for testing fermyonctl components
including isolated Lima homes, CLI contexts and canned process results.
"""

from __future__ import annotations

import io
import logging
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from fermyonctl.cli.context import Context
from fermyonctl.core.config import ConfigManager, Settings
from fermyonctl.core.runner import CommandRunner

SAMPLE_TEMPLATE = b"images:\n  - location: test.img\ncpus: 1\n"


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers the CLI installs so they never outlive a test."""
    yield
    logger = logging.getLogger("fermyonctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """A fake $HOME."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def lima_home(home_dir: Path) -> Path:
    """The Lima home that resolves from ``home_dir``."""
    return home_dir / ".lima"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a settings file that does not exist yet."""
    return tmp_path / "fermyon" / "config.yaml"


@pytest.fixture
def sample_template() -> bytes:
    """Template bytes used in place of the bundled one."""
    return SAMPLE_TEMPLATE


@pytest.fixture
def make_context(
    home_dir: Path,
    config_file: Path,
    sample_template: bytes,
) -> Callable[..., Context]:
    """Factory for CLI contexts isolated from the real user environment."""

    def _make(euid: int = 1000, environ: dict[str, str] | None = None) -> Context:
        if environ is None:
            environ = {"HOME": str(home_dir)}
        ctx = Context(environ=environ, euid=euid, template=sample_template)
        ctx.config = ConfigManager(config_file)
        return ctx

    return _make


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def mock_runner() -> MagicMock:
    """A CommandRunner double that records calls and captures stdout."""
    runner = MagicMock(spec=CommandRunner)
    runner.stdout = io.BytesIO()
    runner.stderr = io.BytesIO()
    runner.dry_run = False
    return runner


@pytest.fixture
def completed() -> Callable[..., subprocess.CompletedProcess[bytes]]:
    """Factory for the value ``subprocess.run`` returns."""

    def _completed(
        returncode: int = 0,
        stdout: bytes = b"",
        stderr: bytes = b"",
    ) -> subprocess.CompletedProcess[bytes]:
        return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)

    return _completed


@pytest.fixture
def mock_run(mocker) -> MagicMock:
    """Patch the process launcher used by the command runner."""
    return mocker.patch("fermyonctl.core.runner.subprocess.run")
