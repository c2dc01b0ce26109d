"""Configuration commands for fermyonctl.

This module provides CLI commands for viewing and initializing the
fermyonctl settings file and for inspecting the bundled Lima template.
"""

from __future__ import annotations

import sys

import click

from fermyonctl.cli.context import Context, pass_context
from fermyonctl.core.config import ConfigManager
from fermyonctl.core.exceptions import ConfigurationError
from fermyonctl.utils.output import console, print_data, print_error, print_info, print_success


@click.group()
def config() -> None:
    """Manage fermyonctl configuration.

    Commands for viewing and initializing the settings file.
    """


@config.command("show")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format.",
)
@pass_context
def config_show(ctx: Context, fmt: str) -> None:
    """Show the effective settings.

    Values missing from the settings file are shown with their defaults.

    Examples:

        $ fermyon config show

        $ fermyon config show --format json
    """
    try:
        config_manager = ctx.init_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e

    print_data(config_manager.to_dict(), fmt=fmt)

    if fmt == "yaml":
        console.print(f"[dim]Config file: {config_manager.path}[/dim]", highlight=False)


@config.command("path")
@pass_context
def config_path(ctx: Context) -> None:
    """Show the settings file path.

    Examples:

        $ fermyon config path
    """
    path = ctx.settings_path
    console.print(str(path), highlight=False)

    if path.exists():
        console.print("[dim](file exists)[/dim]")
    else:
        console.print("[dim](file does not exist)[/dim]")


@config.command("init")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite existing settings file.",
)
@pass_context
def config_init(ctx: Context, force: bool) -> None:
    """Create a settings file with the default values.

    Examples:

        $ fermyon config init

        $ fermyon config init --force
    """
    path = ctx.settings_path

    if path.exists() and not force:
        print_error(f"Configuration already exists: {path}")
        print_info("Use --force to overwrite.")
        raise SystemExit(1)

    try:
        created = ConfigManager.create_default_config(path)
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e

    print_success(f"Created configuration at: {created}")


@config.command("template")
@pass_context
def config_template(ctx: Context) -> None:
    """Print the Lima template written by 'fermyon up'.

    Examples:

        $ fermyon config template
    """
    stream = sys.stdout.buffer
    stream.write(ctx.template)
    stream.flush()
