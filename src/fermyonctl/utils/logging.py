"""Logging configuration for fermyonctl.

This module provides multi-level logging support with both console
and file handlers. Verbosity can be controlled via CLI flags:
- No flag: WARNING only
- -v: INFO level
- -vv or --debug: DEBUG level
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Custom log format
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def get_log_level(verbosity: int, debug: bool = False) -> int:
    """Convert verbosity count and debug flag to a log level.

    Args:
        verbosity: Number of -v flags.
        debug: Whether --debug was given.

    Returns:
        Logging level constant.
    """
    if debug:
        return logging.DEBUG
    levels = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    return levels[min(verbosity, 2)]


def configure_logging(
    verbosity: int = 0,
    debug: bool = False,
    log_file: str | Path | None = None,
    log_level: str | None = None,
) -> None:
    """Configure logging for fermyonctl.

    Sets up a console (stderr) handler and an optional file handler.
    The console handler respects the verbosity level, while the file
    handler always logs at DEBUG level.

    Args:
        verbosity: Number of -v flags from CLI.
        debug: Force DEBUG level on the console handler.
        log_file: Optional path to log file.
        log_level: Level name used when neither -v nor --debug is given.

    Example:
        >>> configure_logging(debug=True)
        >>> configure_logging(log_file="~/.fermyon/logs/fermyon.log")
    """
    if log_level and not debug and verbosity == 0:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    else:
        level = get_log_level(verbosity, debug=debug)

    root_logger = logging.getLogger("fermyonctl")
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)  # Always debug in file
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Creates child loggers under the 'fermyonctl' namespace.

    Args:
        name: Name of the module (e.g., 'runner', 'dev_env').

    Returns:
        Configured logger instance.
    """
    full_name = name if name.startswith("fermyonctl.") else f"fermyonctl.{name}"

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]
