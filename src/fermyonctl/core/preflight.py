"""Checks that run once before any fermyonctl command.

The Lima home directory is resolved the same way limactl resolves it,
so the template lands where the supervisor will look for it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from fermyonctl.core.exceptions import LimaHomeError, RootUserError
from fermyonctl.utils.logging import get_logger

logger = get_logger("preflight")

LIMA_HOME_ENV = "LIMA_HOME"
DOT_LIMA = ".lima"


def check_not_root(euid: int | None = None) -> None:
    """Refuse to run as the superuser.

    Args:
        euid: Effective user id to check. Defaults to the current process.

    Raises:
        RootUserError: If the effective user id is 0.
    """
    if euid is None:
        euid = os.geteuid()
    if euid == 0:
        raise RootUserError()


def resolve_lima_home(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the Lima home directory.

    $LIMA_HOME wins when set; otherwise ~/.lima under $HOME. When the
    directory already exists, symlinks in the path are resolved.

    Args:
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Path to the Lima home directory (may not exist yet).

    Raises:
        LimaHomeError: If neither $LIMA_HOME nor $HOME is set, or the
            existing directory cannot be resolved.
    """
    if environ is None:
        environ = os.environ

    lima_home = environ.get(LIMA_HOME_ENV, "")
    if lima_home:
        path = Path(lima_home)
    else:
        home = environ.get("HOME", "")
        if not home:
            raise LimaHomeError("neither $LIMA_HOME nor $HOME is set")
        path = Path(home) / DOT_LIMA

    if not path.exists():
        logger.debug(f"Lima home {path} does not exist yet")
        return path

    try:
        resolved = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise LimaHomeError(f"cannot resolve {path}: {e}") from e

    logger.debug(f"Resolved Lima home to {resolved}")
    return resolved
