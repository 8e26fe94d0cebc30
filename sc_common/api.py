"""Public API surface for sc_common."""

from sc_common.errors import (
    AwsCliError,
    AwsCliNotInstalledError,
    CommandNotFoundError,
    ConfigurationError,
    DuplicateCommandError,
    InvalidProfileError,
    SCError,
    SessionLaunchError,
    error_to_payload,
    wrap_error,
)
from sc_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "SCError",
    "AwsCliError",
    "AwsCliNotInstalledError",
    "InvalidProfileError",
    "ConfigurationError",
    "CommandNotFoundError",
    "DuplicateCommandError",
    "SessionLaunchError",
    "wrap_error",
    "error_to_payload",
]
