"""CLI module for fermyonctl.

This package contains all Click command definitions for the fermyon CLI.
"""

from fermyonctl.cli.main import cli

__all__ = ["cli"]
