"""CLI context for fermyonctl.

This module defines the shared context object passed to all CLI commands,
extracted to avoid circular imports.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import click

from fermyonctl.core.config import ConfigManager, Settings, get_default_config_path
from fermyonctl.core.dev_env import DevEnvironment
from fermyonctl.core.preflight import check_not_root, resolve_lima_home
from fermyonctl.core.runner import CommandRunner
from fermyonctl.core.template import load_template
from fermyonctl.utils.logging import configure_logging


class Context:
    """CLI context object passed to all commands.

    Holds the startup state of one invocation: settings, the instance
    template and the inputs to the preflight checks. Tests construct it
    directly and hand it to Click as ``obj``.

    Args:
        environ: Environment used to resolve the Lima home.
            Defaults to ``os.environ``.
        euid: Effective user id for the root check. Defaults to the
            current process.
        template: Instance template bytes. Defaults to the bundled one.

    Attributes:
        config: ConfigManager instance, created on first use.
        config_path: Settings file chosen with --config, if any.
        runner: CommandRunner instance.
        lima_home: Lima home resolved by ``preflight()``.
        verbose: Verbosity level.
        dry_run: Whether to run in dry-run mode.
        debug: Whether debug logging is enabled.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        euid: int | None = None,
        template: bytes | None = None,
    ) -> None:
        self.environ = environ
        self.euid = euid
        self._template = template
        self.config: ConfigManager | None = None
        self.config_path: Path | None = None
        self.runner: CommandRunner | None = None
        self.dev_env: DevEnvironment | None = None
        self.lima_home: Path | None = None
        self.verbose: int = 0
        self.dry_run: bool = False
        self.debug: bool = False

    @property
    def template(self) -> bytes:
        """Instance template, loaded on first use."""
        if self._template is None:
            self._template = load_template()
        return self._template

    @property
    def settings_path(self) -> Path:
        """Settings file location, without reading the file."""
        if self.config is not None:
            return self.config.path
        if self.config_path is not None:
            return self.config_path
        return get_default_config_path()

    def use_config_path(self, path: str | Path) -> None:
        """Select the settings file to load on first use."""
        self.config_path = Path(path).expanduser()
        if self.config is not None and self.config.path != self.config_path:
            self.config = None

    def init_config(self) -> ConfigManager:
        """Initialize configuration manager.

        Returns:
            ConfigManager instance.

        Raises:
            ConfigurationError: If the settings file is invalid.
        """
        if self.config is None:
            self.config = ConfigManager(self.settings_path)
        return self.config

    def load_settings(self) -> Settings:
        """Load settings and apply their logging options.

        Returns:
            The effective settings.

        Raises:
            ConfigurationError: If the settings file is invalid.
        """
        settings = self.init_config().settings
        self.configure_logging(settings)
        return settings

    def configure_logging(self, settings: Settings | None = None) -> None:
        """(Re)configure logging from the CLI flags and optional settings."""
        if settings is None and self.config is not None:
            settings = self.config.settings
        configure_logging(
            verbosity=self.verbose,
            debug=self.debug,
            log_file=settings.logging.file if settings else None,
            log_level=settings.logging.level if settings else None,
        )

    def preflight(self) -> Path:
        """Run the checks every command depends on.

        Returns:
            The resolved Lima home directory.

        Raises:
            RootUserError: If running as root.
            LimaHomeError: If the Lima home cannot be resolved.
        """
        check_not_root(self.euid)
        self.lima_home = resolve_lima_home(self.environ)
        return self.lima_home

    def init_runner(self) -> CommandRunner:
        """Initialize command runner.

        Returns:
            CommandRunner instance.
        """
        if self.runner is None:
            self.runner = CommandRunner(dry_run=self.dry_run)
        return self.runner

    def init_dev_env(self) -> DevEnvironment:
        """Initialize the development environment operations.

        Returns:
            DevEnvironment instance.
        """
        if self.dev_env is None:
            lima_home = self.lima_home or self.preflight()
            self.dev_env = DevEnvironment(
                self.load_settings(),
                self.init_runner(),
                lima_home,
                self.template,
            )
        return self.dev_env


pass_context = click.make_pass_decorator(Context, ensure=True)


def _enable_debug(click_ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or click_ctx.resilient_parsing:
        return
    ctx = click_ctx.ensure_object(Context)
    ctx.debug = True
    ctx.configure_logging()


# --debug is global: accepted before the subcommand or after it.
debug_option = click.option(
    "--debug",
    is_flag=True,
    expose_value=False,
    callback=_enable_debug,
    help="Debug mode: DEBUG logging and full error tracebacks.",
)
