"""Synchronous runner for external commands.

Every command fermyonctl issues (limactl, curl) goes through
CommandRunner. Output is buffered in full, then relayed to the caller's
streams (stdout first, then stderr) whether or not the command succeeded.
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import BinaryIO

from fermyonctl.core.exceptions import (
    CommandError,
    CommandFailedError,
    CommandNotFoundError,
)
from fermyonctl.utils.logging import get_logger

logger = get_logger("runner")


@dataclass
class CommandResult:
    """Result from a finished command.

    Args:
        argv: The argument vector that was executed.
        stdout: Captured standard output.
        stderr: Captured standard error.
        exit_code: Exit status of the child process.
    """

    argv: list[str]
    stdout: bytes
    stderr: bytes
    exit_code: int

    @property
    def command(self) -> str:
        """Shell-quoted command line, for display."""
        return shlex.join(self.argv)


class CommandRunner:
    """Runs external commands and relays their output.

    Args:
        stdout: Binary stream that receives child stdout. Defaults to the
            process stdout, looked up at write time.
        stderr: Binary stream that receives child stderr. Defaults to the
            process stderr, looked up at write time.
        dry_run: If True, log commands instead of running them.

    Example:
        >>> runner = CommandRunner()
        >>> result = runner.run(["limactl", "list"])
        >>> result.exit_code
        0
    """

    def __init__(
        self,
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
        dry_run: bool = False,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self.dry_run = dry_run

    @property
    def stdout(self) -> BinaryIO:
        return self._stdout or sys.stdout.buffer

    @property
    def stderr(self) -> BinaryIO:
        return self._stderr or sys.stderr.buffer

    def run(self, argv: list[str]) -> CommandResult:
        """Run a command to completion.

        Args:
            argv: Executable followed by its arguments.

        Returns:
            CommandResult for a command that exited with status 0.

        Raises:
            ValueError: If argv is empty.
            CommandNotFoundError: If the executable cannot be found.
            CommandFailedError: If the command exits with a non-zero status.
        """
        if not argv:
            raise ValueError("argv must not be empty")

        argv = list(argv)
        command = shlex.join(argv)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would execute: {command}")
            return CommandResult(argv=argv, stdout=b"", stderr=b"", exit_code=0)

        logger.debug(f"Executing: {command}")

        try:
            completed = subprocess.run(argv, capture_output=True, check=False)
        except FileNotFoundError as e:
            logger.debug(f"Executable not found: {argv[0]}")
            raise CommandNotFoundError(argv) from e
        except OSError as e:
            raise CommandError(argv, f"could not be started: {e.strerror or e}") from e

        self._relay(completed.stdout, completed.stderr)

        exit_code = completed.returncode
        if exit_code < 0:
            # Killed by a signal; report it the way a shell would.
            exit_code = 128 - exit_code

        if exit_code != 0:
            logger.debug(f"Command failed with exit code {exit_code}: {command}")
            raise CommandFailedError(argv, exit_code)

        logger.debug(f"Command succeeded: {command}")
        return CommandResult(
            argv=argv,
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_code=exit_code,
        )

    def _relay(self, stdout_data: bytes, stderr_data: bytes) -> None:
        """Write captured output to the relay streams, stdout first."""
        if stdout_data:
            self.stdout.write(stdout_data)
            self.stdout.flush()
        if stderr_data:
            self.stderr.write(stderr_data)
            self.stderr.flush()
