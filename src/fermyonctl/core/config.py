"""Settings management for fermyonctl.

This module provides a Pydantic-based settings system backed by an
optional YAML file. Every value has a default, so fermyonctl works
without any settings file at all.

The default location is ~/.fermyon/config.yaml, which can be
overridden with the FERMYON_CONFIG environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from fermyonctl.core.exceptions import ConfigurationError

DEFAULT_INSTANCE_NAME = "spin"
DEFAULT_HEALTH_URL = "http://hippo.local.fermyon.link/healthz"


def get_default_config_path() -> Path:
    """Get the default settings file path.

    The path can be overridden by setting the FERMYON_CONFIG
    environment variable.

    Returns:
        Path to the settings file.
    """
    env_path = os.environ.get("FERMYON_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".fermyon" / "config.yaml"


def check_path_component(value: str) -> str:
    """Ensure value names a single entry inside a directory.

    Raises:
        ValueError: If value contains a path separator or is ``.``/``..``.
    """
    if "/" in value or "\\" in value or value in {".", ".."}:
        raise ValueError(f"must be a single path component, got {value!r}")
    return value


class LoggingSettings(BaseModel):
    """Logging settings.

    Args:
        level: Console log level used when no CLI flag is given.
        file: Path to log file (optional).
    """

    level: str = Field(default="WARNING", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {sorted(valid_levels)}")
        return v_upper


class Settings(BaseModel):
    """Main settings model for fermyonctl.

    Args:
        instance: Name of the Lima instance that hosts the platform.
        limactl: Lima supervisor executable.
        curl: HTTP client executable used for the health check.
        template_file: File name of the instance template in the Lima home.
        health_url: Endpoint probed by ``fermyon status``.
        logging: Logging settings.

    Example config.yaml:
        ```yaml
        instance: spin
        limactl: limactl
        curl: curl
        health_url: http://hippo.local.fermyon.link/healthz
        logging:
          level: WARNING
          file: ~/.fermyon/logs/fermyon.log
        ```
    """

    instance: Annotated[str, Field(min_length=1)] = DEFAULT_INSTANCE_NAME
    limactl: Annotated[str, Field(min_length=1)] = "limactl"
    curl: Annotated[str, Field(min_length=1)] = "curl"
    template_file: Annotated[str, Field(min_length=1)] = "lima.yaml"
    health_url: str = DEFAULT_HEALTH_URL
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("instance", "template_file")
    @classmethod
    def validate_path_component(cls, v: str) -> str:
        """Reject values that would escape the instance directory."""
        return check_path_component(v)


class ConfigManager:
    """Manages reading and writing fermyonctl settings.

    A missing settings file is not an error: defaults are used and
    nothing is written until ``save()`` is called.

    Args:
        path: Optional path to settings file. Uses default if not specified.

    Attributes:
        path: Path to the settings file.
        settings: The loaded and validated Settings object.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        if path is None:
            self.path = get_default_config_path()
        else:
            self.path = Path(path).expanduser()

        self.settings = self._load_or_default()

    def _load_or_default(self) -> Settings:
        if self.path.exists():
            return self._load()
        return Settings()

    def _load(self) -> Settings:
        """Load and validate settings from file.

        Returns:
            Validated Settings object.

        Raises:
            ConfigurationError: If the settings file is invalid.
        """
        try:
            with self.path.open("r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in config file: {e}",
                details={"path": str(self.path)},
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config: {e}",
                details={"path": str(self.path)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping",
                details={"path": str(self.path)},
            )

        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                details={"path": str(self.path)},
            ) from e

    def save(self) -> None:
        """Save current settings to file.

        Raises:
            ConfigurationError: If saving fails.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save config: {e}",
                details={"path": str(self.path)},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary.

        Returns:
            Dictionary representation of the settings.
        """
        return self.settings.model_dump(exclude_none=True)

    @classmethod
    def create_default_config(cls, path: Path | None = None) -> Path:
        """Write a settings file containing the defaults.

        Args:
            path: Optional path for the file. Uses default if not specified.

        Returns:
            Path to the created settings file.
        """
        path = get_default_config_path() if path is None else Path(path).expanduser()

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                yaml.safe_dump(
                    Settings().model_dump(exclude_none=True),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            raise ConfigurationError(
                f"Failed to create config: {e}",
                details={"path": str(path)},
            ) from e

        return path
