"""fermyonctl - CLI for a local Fermyon development VM.

This package provisions and controls a Lima-based virtual machine that
runs the Fermyon platform (Spin, Hippo, Bindle, Nomad and Consul) for
local development.

Example:
    $ fermyon up
    $ fermyon environment
    $ fermyon status
    $ fermyon down
"""

__version__ = "0.0.1"

from fermyonctl.core.exceptions import (
    CommandError,
    CommandFailedError,
    CommandNotFoundError,
    ConfigurationError,
    FermyonError,
    LimaHomeError,
    RootUserError,
    TemplateWriteError,
)

__all__ = [
    "CommandError",
    "CommandFailedError",
    "CommandNotFoundError",
    "ConfigurationError",
    "FermyonError",
    "LimaHomeError",
    "RootUserError",
    "TemplateWriteError",
    "__version__",
]
