"""Custom exceptions for fermyonctl.

This module defines a hierarchy of exceptions used throughout fermyonctl
to provide meaningful error messages and a process exit code for each
failure.

Exception Hierarchy:
    FermyonError (base)
    ├── ConfigurationError
    │   └── LimaHomeError
    ├── RootUserError
    ├── TemplateWriteError
    └── CommandError
        ├── CommandNotFoundError
        └── CommandFailedError
"""

from __future__ import annotations

from typing import Any


class FermyonError(Exception):
    """Base exception for all fermyonctl errors.

    Args:
        message: Human-readable error message.
        details: Optional dictionary with additional error context.

    Attributes:
        message: The error message.
        details: Additional context about the error.
        exit_code: Process exit status the CLI uses for this error.
    """

    exit_code: int = 1

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(FermyonError):
    """Raised when there is a configuration-related error.

    Examples:
        - Invalid YAML syntax in the settings file
        - Invalid setting values
    """


class LimaHomeError(ConfigurationError):
    """Raised when the Lima configuration root cannot be resolved.

    Args:
        message: Description of why resolution failed.
    """

    def __init__(self, message: str) -> None:
        super().__init__(f"Cannot resolve Lima home directory: {message}")


class RootUserError(FermyonError):
    """Raised when fermyonctl is invoked by the superuser."""

    def __init__(self) -> None:
        super().__init__("must not run as the root")


class TemplateWriteError(FermyonError):
    """Raised when the instance template cannot be written.

    Args:
        path: The file or directory that could not be written.
        message: Description of the failure.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(
            f"Failed to write instance template: {message}",
            details={"path": path},
        )
        self.path = path


class CommandError(FermyonError):
    """Raised when an external command cannot be run successfully.

    Args:
        argv: The argument vector of the command.
        message: Description of the failure.
    """

    def __init__(self, argv: list[str], message: str) -> None:
        super().__init__(f"'{' '.join(argv)}' {message}")
        self.argv = argv


class CommandNotFoundError(CommandError):
    """Raised when the executable is not on the search path.

    Args:
        argv: The argument vector of the command.
    """

    exit_code = 127

    def __init__(self, argv: list[str]) -> None:
        super().__init__(argv, f"failed: executable '{argv[0]}' not found")


class CommandFailedError(CommandError):
    """Raised when a command exits with a non-zero status.

    Args:
        argv: The argument vector of the command.
        exit_code: The exit status reported for the child process.
    """

    def __init__(self, argv: list[str], exit_code: int) -> None:
        super().__init__(argv, f"exited with status {exit_code}")
        self.exit_code = exit_code
