"""Instance template shipped with fermyonctl.

The Lima template is package data and is treated as opaque bytes: it is
never parsed or validated, only written out before the instance starts.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from fermyonctl.core.exceptions import TemplateWriteError
from fermyonctl.utils.logging import get_logger

logger = get_logger("template")

TEMPLATE_RESOURCE = "spin.yaml"
DIR_MODE = 0o744


def load_template(name: str = TEMPLATE_RESOURCE) -> bytes:
    """Read a bundled template.

    Args:
        name: File name under ``fermyonctl/templates``.

    Returns:
        The raw template bytes.
    """
    return resources.files("fermyonctl").joinpath("templates").joinpath(name).read_bytes()


def write_template(
    lima_home: Path,
    instance: str,
    content: bytes,
    filename: str = "lima.yaml",
) -> Path:
    """Write the template into the instance directory.

    Creates ``<lima_home>/<instance>`` if needed and overwrites
    ``<filename>`` inside it.

    Args:
        lima_home: Resolved Lima home directory.
        instance: Instance name.
        content: Template bytes, written verbatim.
        filename: Name of the file inside the instance directory.

    Returns:
        Path of the written file.

    Raises:
        TemplateWriteError: If the directory or file cannot be written.
    """
    directory = lima_home / instance
    target = directory / filename

    try:
        directory.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise TemplateWriteError(str(directory), str(e)) from e

    try:
        target.write_bytes(content)
    except OSError as e:
        raise TemplateWriteError(str(target), str(e)) from e

    logger.info(f"Wrote {len(content)} bytes to {target}")
    return target
