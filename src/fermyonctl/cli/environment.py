"""The ``environment`` command."""

from __future__ import annotations

import click

from fermyonctl.cli.context import debug_option
from fermyonctl.core.dev_env import ENVIRONMENT_TEXT


@click.command("environment")
@click.argument("instance", required=False)
@debug_option
def environment(instance: str | None) -> None:
    """Get environment variables to help with local dev for Spin.

    INSTANCE is accepted for symmetry with the other commands; the
    exported endpoints are the same for every instance. Settings are
    not read, so the output never changes.

    Examples:

        $ fermyon environment
    """
    click.echo(ENVIRONMENT_TEXT, nl=False)
