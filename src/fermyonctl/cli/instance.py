"""Instance lifecycle and status commands for fermyonctl.

This module provides the ``up``, ``down`` and ``status`` commands. All
of them shell out to limactl; output from the child process is relayed
as-is and its exit status becomes the command's exit status.
"""

from __future__ import annotations

import click

from fermyonctl.cli.context import Context, debug_option, pass_context
from fermyonctl.core.exceptions import FermyonError
from fermyonctl.utils.output import print_error, print_info, print_success

instance_argument = click.argument("instance", required=False)


@click.command("up")
@instance_argument
@debug_option
@pass_context
def up(ctx: Context, instance: str | None) -> None:
    """Start an instance of Fermyon.

    Writes the Lima template for INSTANCE (default: spin) into the
    Lima home, overwriting any previous copy, then starts it.

    Examples:

        $ fermyon up
    """
    try:
        dev_env = ctx.init_dev_env()
        name = instance or dev_env.settings.instance
        dev_env.up(name)
    except FermyonError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e

    if ctx.dry_run:
        print_info(f"[DRY RUN] Would start instance '{name}'")
    else:
        print_success(f"Started instance '{name}'")


@click.command("down")
@instance_argument
@debug_option
@pass_context
def down(ctx: Context, instance: str | None) -> None:
    """Stop an instance of Fermyon.

    Examples:

        $ fermyon down
    """
    try:
        dev_env = ctx.init_dev_env()
        name = instance or dev_env.settings.instance
        dev_env.down(name)
    except FermyonError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e

    if ctx.dry_run:
        print_info(f"[DRY RUN] Would stop instance '{name}'")
    else:
        print_success(f"Stopped instance '{name}'")


@click.command("status")
@instance_argument
@debug_option
@pass_context
def status(ctx: Context, instance: str | None) -> None:
    """Validate the Fermyon service status.

    Lists Lima instances, then queries Consul, Nomad and the Hippo
    health endpoint. Stops at the first check that fails.

    Examples:

        $ fermyon status
    """
    try:
        ctx.init_dev_env().status(instance)
    except FermyonError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from e
