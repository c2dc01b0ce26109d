"""Utility modules for fermyonctl.

This package contains shared utilities for logging and output formatting.
"""

from fermyonctl.utils.logging import configure_logging, get_logger
from fermyonctl.utils.output import console, error_console

__all__ = [
    "configure_logging",
    "console",
    "error_console",
    "get_logger",
]
