"""Core functionality for fermyonctl.

This module contains the core logic: settings, preflight checks, the
instance template, the command runner and the environment operations.
"""

from fermyonctl.core.config import ConfigManager, LoggingSettings, Settings
from fermyonctl.core.dev_env import DevEnvironment
from fermyonctl.core.exceptions import (
    CommandError,
    CommandFailedError,
    CommandNotFoundError,
    ConfigurationError,
    FermyonError,
    LimaHomeError,
    RootUserError,
    TemplateWriteError,
)
from fermyonctl.core.runner import CommandResult, CommandRunner

__all__ = [
    "CommandError",
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandResult",
    "CommandRunner",
    "ConfigManager",
    "ConfigurationError",
    "DevEnvironment",
    "FermyonError",
    "LimaHomeError",
    "LoggingSettings",
    "RootUserError",
    "Settings",
    "TemplateWriteError",
]
