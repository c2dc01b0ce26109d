"""Tests for the development environment operations."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from fermyonctl.core.config import Settings
from fermyonctl.core.dev_env import DevEnvironment
from fermyonctl.core.exceptions import (
    CommandFailedError,
    ConfigurationError,
    CommandNotFoundError,
    TemplateWriteError,
)
from fermyonctl.core.runner import CommandResult

EXPECTED_ENVIRONMENT = (
    "\n"
    "Adding these variables to your shell environment will enable the spin CLI "
    "to target your local development VM.\n"
    "\n"
    "export HIPPO_URL=http://hippo.local.fermyon.link/\n"
    "export BINDLE_URL=http://bindle.local.fermyon.link/v1\n"
)


def ok(argv: list[str], stdout: bytes = b"") -> CommandResult:
    return CommandResult(argv=argv, stdout=stdout, stderr=b"", exit_code=0)


class TestDevEnvironment:
    """Tests for DevEnvironment."""

    @pytest.fixture
    def dev_env(
        self,
        settings: Settings,
        mock_runner: MagicMock,
        tmp_path: Path,
        sample_template: bytes,
    ) -> DevEnvironment:
        """Create a DevEnvironment with a mocked runner."""
        return DevEnvironment(settings, mock_runner, tmp_path / ".lima", sample_template)

    def test_up_writes_template_then_starts(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
        tmp_path: Path,
        sample_template: bytes,
    ) -> None:
        """Test up writes the template before starting the instance."""
        template_path = tmp_path / ".lima" / "spin" / "lima.yaml"

        def start(argv: list[str]) -> CommandResult:
            assert template_path.read_bytes() == sample_template
            return ok(argv)

        mock_runner.run.side_effect = start

        dev_env.up()

        mock_runner.run.assert_called_once_with(["limactl", "start", "--name", "spin"])

    def test_up_named_instance(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
        tmp_path: Path,
    ) -> None:
        """Test up with an explicit instance name."""
        dev_env.up("dev")

        assert (tmp_path / ".lima" / "dev" / "lima.yaml").exists()
        mock_runner.run.assert_called_once_with(["limactl", "start", "--name", "dev"])

    def test_up_template_failure_skips_start(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
        tmp_path: Path,
    ) -> None:
        """Test the supervisor is not started if the template was not written."""
        lima_home = tmp_path / ".lima"
        lima_home.mkdir()
        (lima_home / "spin").write_text("in the way")

        with pytest.raises(TemplateWriteError):
            dev_env.up()

        mock_runner.run.assert_not_called()

    def test_up_dry_run_skips_template(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
        tmp_path: Path,
    ) -> None:
        """Test dry-run mode leaves the filesystem alone."""
        mock_runner.dry_run = True

        dev_env.up()

        assert not (tmp_path / ".lima").exists()
        mock_runner.run.assert_called_once_with(["limactl", "start", "--name", "spin"])

    def test_up_propagates_supervisor_failure(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
    ) -> None:
        """Test limactl's failure is the result of up."""
        argv = ["limactl", "start", "--name", "spin"]
        mock_runner.run.side_effect = CommandFailedError(argv, 2)

        with pytest.raises(CommandFailedError) as exc_info:
            dev_env.up()

        assert exc_info.value.exit_code == 2

    def test_down(self, dev_env: DevEnvironment, mock_runner: MagicMock) -> None:
        """Test down stops the instance."""
        dev_env.down()
        mock_runner.run.assert_called_once_with(["limactl", "stop", "spin"])

    def test_down_custom_limactl(
        self,
        mock_runner: MagicMock,
        tmp_path: Path,
        sample_template: bytes,
    ) -> None:
        """Test the supervisor executable comes from settings."""
        settings = Settings(limactl="/opt/lima/bin/limactl", instance="dev")
        dev_env = DevEnvironment(settings, mock_runner, tmp_path, sample_template)

        dev_env.down()

        mock_runner.run.assert_called_once_with(["/opt/lima/bin/limactl", "stop", "dev"])

    def test_environment(self, dev_env: DevEnvironment, mock_runner: MagicMock) -> None:
        """Test environment prints the fixed exports and runs nothing."""
        dev_env.environment()

        assert mock_runner.stdout.getvalue().decode() == EXPECTED_ENVIRONMENT
        mock_runner.run.assert_not_called()

    def test_environment_text(self, dev_env: DevEnvironment) -> None:
        """Test the exports text."""
        assert dev_env.environment_text() == EXPECTED_ENVIRONMENT

    def test_status_runs_all_checks_in_order(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
    ) -> None:
        """Test status runs the four checks in a fixed order."""
        mock_runner.run.side_effect = lambda argv: ok(argv)

        results = dev_env.status()

        assert len(results) == 4
        assert mock_runner.run.call_args_list == [
            call(["limactl", "list"]),
            call(["limactl", "shell", "spin", "consul", "members", "status"]),
            call(["limactl", "shell", "spin", "nomad", "status"]),
            call(["curl", "http://hippo.local.fermyon.link/healthz"]),
        ]
        assert mock_runner.stdout.getvalue() == (
            b"Lima VM List:\n"
            b"\nConsul Member Status:\n"
            b"\nNomad Job Status:\n"
            b"\nHippo Health Endpoint:\n"
        )

    def test_status_first_failure_stops(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
    ) -> None:
        """Test a failing instance list skips the remaining checks."""
        error = CommandFailedError(["limactl", "list"], 1)
        mock_runner.run.side_effect = error

        with pytest.raises(CommandFailedError) as exc_info:
            dev_env.status()

        assert exc_info.value is error
        mock_runner.run.assert_called_once_with(["limactl", "list"])
        assert mock_runner.stdout.getvalue() == b"Lima VM List:\n"

    def test_status_missing_curl_stops_at_health_check(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
    ) -> None:
        """Test a missing HTTP client fails the last check only."""
        mock_runner.run.side_effect = [
            ok(["limactl", "list"]),
            ok(["limactl", "shell"]),
            ok(["limactl", "shell"]),
            CommandNotFoundError(["curl"]),
        ]

        with pytest.raises(CommandNotFoundError):
            dev_env.status()

        assert mock_runner.run.call_count == 4

    def test_status_named_instance(
        self,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
    ) -> None:
        """Test in-VM checks target the requested instance."""
        mock_runner.run.side_effect = lambda argv: ok(argv)

        dev_env.status("dev")

        assert mock_runner.run.call_args_list[2] == call(
            ["limactl", "shell", "dev", "nomad", "status"]
        )

    @pytest.mark.parametrize("name", ["../escape", "a/b", "a\\b", ".."])
    def test_invalid_instance_name(
        self,
        name: str,
        dev_env: DevEnvironment,
        mock_runner: MagicMock,
        tmp_path: Path,
    ) -> None:
        """Test instance names that are not a single path component are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid instance name"):
            dev_env.up(name)

        mock_runner.run.assert_not_called()
        assert not (tmp_path / ".lima").exists()
