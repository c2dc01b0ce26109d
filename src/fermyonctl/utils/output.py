"""Rich terminal output utilities for fermyonctl.

Status and error messages go through Rich consoles. Output relayed from
child processes is written byte-for-byte by the command runner instead.
"""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

# Global console instances
console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)


def print_data(data: dict[str, Any], fmt: str = "yaml") -> None:
    """Print a dictionary as YAML or JSON.

    Args:
        data: Dictionary to display.
        fmt: Either "yaml" or "json".
    """
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
    else:
        console.print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
            markup=False,
            highlight=False,
        )


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message to display.
    """
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr.

    Args:
        message: Error message to display.
    """
    error_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[yellow]![/yellow] {escape(message)}", highlight=False)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")
