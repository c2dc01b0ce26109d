"""Lifecycle and diagnostics for the local Fermyon development VM.

This module provides the DevEnvironment class that backs the user-facing
commands. The VM itself is managed by limactl; this class only prepares
its template and composes limactl and curl invocations.
"""

from __future__ import annotations

from pathlib import Path

from fermyonctl.core.config import Settings, check_path_component
from fermyonctl.core.exceptions import ConfigurationError
from fermyonctl.core.runner import CommandResult, CommandRunner
from fermyonctl.core.template import write_template
from fermyonctl.utils.logging import get_logger

logger = get_logger("dev_env")

ENVIRONMENT_TEXT = (
    "\n"
    "Adding these variables to your shell environment will enable the spin CLI "
    "to target your local development VM.\n"
    "\n"
    "export HIPPO_URL=http://hippo.local.fermyon.link/\n"
    "export BINDLE_URL=http://bindle.local.fermyon.link/v1\n"
)


class DevEnvironment:
    """Operations on the local development environment.

    Args:
        settings: Effective fermyonctl settings.
        runner: Runner used for every external command.
        lima_home: Resolved Lima home directory.
        template: Instance template bytes written by ``up``.

    Example:
        >>> env = DevEnvironment(Settings(), CommandRunner(), lima_home, template)
        >>> env.up()
        >>> env.status()
        >>> env.down()
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        lima_home: Path,
        template: bytes,
    ) -> None:
        self.settings = settings
        self.runner = runner
        self.lima_home = lima_home
        self.template = template

    def _instance(self, instance: str | None) -> str:
        name = instance or self.settings.instance
        try:
            return check_path_component(name)
        except ValueError as e:
            raise ConfigurationError(f"Invalid instance name: {e}") from e

    def _write(self, text: str) -> None:
        stream = self.runner.stdout
        stream.write(text.encode("utf-8"))
        stream.flush()

    def _limactl(self, *args: str) -> CommandResult:
        return self.runner.run([self.settings.limactl, *args])

    def up(self, instance: str | None = None) -> CommandResult:
        """Write the instance template and start the instance.

        Args:
            instance: Instance name. Defaults to the configured instance.

        Returns:
            Result of ``limactl start``.

        Raises:
            TemplateWriteError: If the template cannot be written.
            CommandError: If limactl fails.
        """
        name = self._instance(instance)

        if self.runner.dry_run:
            target = self.lima_home / name / self.settings.template_file
            logger.info(f"[DRY RUN] Would write template to {target}")
        else:
            write_template(
                self.lima_home,
                name,
                self.template,
                filename=self.settings.template_file,
            )

        logger.info(f"Starting instance '{name}'")
        return self._limactl("start", "--name", name)

    def down(self, instance: str | None = None) -> CommandResult:
        """Stop the instance.

        No state check is done first; limactl reports an unknown or
        stopped instance itself.

        Args:
            instance: Instance name. Defaults to the configured instance.

        Returns:
            Result of ``limactl stop``.
        """
        name = self._instance(instance)
        logger.info(f"Stopping instance '{name}'")
        return self._limactl("stop", name)

    def environment_text(self) -> str:
        """Shell exports that point the spin CLI at the VM."""
        return ENVIRONMENT_TEXT

    def environment(self) -> None:
        """Print the shell exports. Never fails."""
        self._write(self.environment_text())

    def status(self, instance: str | None = None) -> list[CommandResult]:
        """Run the diagnostic checks in order, stopping at the first failure.

        The checks are: the Lima instance list, Consul membership and
        Nomad job status inside the instance, and the Hippo health
        endpoint. Each is preceded by a header line.

        Args:
            instance: Instance name. Defaults to the configured instance.

        Returns:
            Results of all four checks.

        Raises:
            CommandError: From the first check that fails; later checks
                are not run.
        """
        name = self._instance(instance)
        limactl = self.settings.limactl
        checks: list[tuple[str, list[str]]] = [
            ("Lima VM List:\n", [limactl, "list"]),
            (
                "\nConsul Member Status:\n",
                [limactl, "shell", name, "consul", "members", "status"],
            ),
            ("\nNomad Job Status:\n", [limactl, "shell", name, "nomad", "status"]),
            ("\nHippo Health Endpoint:\n", [self.settings.curl, self.settings.health_url]),
        ]

        results: list[CommandResult] = []
        for header, argv in checks:
            self._write(header)
            results.append(self.runner.run(argv))
        return results
