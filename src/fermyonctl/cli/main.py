"""Main CLI entry point for fermyonctl.

This module defines the main CLI group and global options that are
shared across all commands.
"""

from __future__ import annotations

import os
import sys

import click

from fermyonctl import __version__
from fermyonctl.cli.config_cmd import config
from fermyonctl.cli.context import Context, pass_context
from fermyonctl.cli.environment import environment
from fermyonctl.cli.instance import down, status, up
from fermyonctl.core.config import get_default_config_path
from fermyonctl.core.exceptions import FermyonError
from fermyonctl.utils.logging import get_logger
from fermyonctl.utils.output import console, error_console, print_error

logger = get_logger("cli")

__all__ = ["Context", "cli", "main", "pass_context"]


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"fermyon version [cyan]{__version__}[/cyan]")
    ctx.exit()


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Debug mode: DEBUG logging and full error tracebacks.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v, -vv for more).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print commands without executing them.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="FERMYON_CONFIG",
    help=f"Path to settings file (default: {get_default_config_path()}).",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@pass_context
def cli(
    ctx: Context,
    debug: bool,
    verbose: int,
    dry_run: bool,
    config_path: str | None,
) -> None:
    """fermyon - Fermyon local dev installer.

    Provisions a Lima virtual machine running the Fermyon platform
    and reports on the services inside it.

    Examples:

        # Start the default instance

        $ fermyon up

        # Export environment

        $ fermyon environment

        # List Fermyon service status

        $ fermyon status

        # Stop the default instance

        $ fermyon down
    """
    ctx.debug = debug
    ctx.verbose = verbose
    ctx.dry_run = dry_run
    if config_path:
        ctx.use_config_path(config_path)

    ctx.configure_logging()

    # Settings are loaded by the commands that use them.
    try:
        lima_home = ctx.preflight()
    except FermyonError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e

    logger.debug(f"Using Lima home {lima_home}")


# Register subcommands
cli.add_command(up)
cli.add_command(down)
cli.add_command(environment)
cli.add_command(status)
cli.add_command(config)


def main() -> None:
    """Main entry point with error handling."""
    try:
        cli(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except FermyonError as e:
        print_error(str(e))
        sys.exit(e.exit_code)
    except (click.exceptions.Abort, KeyboardInterrupt):
        error_console.print("\n[dim]Interrupted[/dim]")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("FERMYON_DEBUG") or "--debug" in sys.argv:
            import traceback

            traceback.print_exc()
        else:
            print_error(f"Unexpected error: {e}")
            error_console.print("[dim]Use --debug for full traceback[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
