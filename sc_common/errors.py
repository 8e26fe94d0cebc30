"""Shared error taxonomy for ssm-commander."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class SCError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class AwsCliError(SCError):
    """The AWS CLI returned a failure or unparsable output."""


class AwsCliNotInstalledError(AwsCliError):
    """A required binary (aws, session-manager-plugin) is missing."""


class InvalidProfileError(AwsCliError):
    """The AWS CLI profile does not exist or cannot export credentials."""


class ConfigurationError(SCError):
    """Failure due to an invalid or unreadable command store."""


class CommandNotFoundError(ConfigurationError):
    """No stored command carries the requested name."""


class DuplicateCommandError(ConfigurationError):
    """A stored command with the same name already exists."""


class SessionLaunchError(SCError):
    """The session process could not be started."""


T = TypeVar("T", bound=SCError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed SCError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: SCError) -> dict[str, Any]:
    """Convert an SCError to a flat structured-log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
