"""Shared error taxonomy for xcodearchive.

Every pipeline stage fails with exactly one error class; the class carries the
process exit code reported by the CLI.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, TypeVar


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


class XAError(Exception):
    """Base error type for typed failure handling."""

    exit_code: ClassVar[int] = 1

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
        return {
            "type": self.error_type,
            "message": str(self),
            "exit_code": self.exit_code,
            "context": self.context,
        }


class ConfigurationError(XAError):
    """Failure due to an invalid settings file or option combination."""


class NoProjectFound(XAError):
    """No .xcodeproj container in the search directory."""

    exit_code = 2


class AmbiguousProject(XAError):
    """More than one .xcodeproj container in the search directory."""

    exit_code = 3


class ReleaseConfigurationNotFound(XAError):
    """The build configuration at the release slot is not named Release."""

    exit_code = 4


class ToolInvocationError(XAError):
    """An external tool exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        output: str = "",
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        merged = {"status": status, **(context or {})}
        super().__init__(message, context=merged, cause=cause)
        self.status = status
        self.output = output


class CleanFailed(ToolInvocationError):
    """xcodebuild clean failed."""

    exit_code = 5


class BuildFailed(ToolInvocationError):
    """xcodebuild failed."""

    exit_code = 6


class PackagingFailed(ToolInvocationError):
    """PackageApplication failed to sign or package the bundle."""

    exit_code = 7


class SymbolBundleNotFound(XAError):
    """The .dSYM bundle is missing from the build directory."""

    exit_code = 8


T = TypeVar("T", bound=XAError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed XAError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: XAError) -> dict[str, Any]:
    """Convert an XAError to a run summary payload."""
    payload = {
        "error_type": error.error_type,
        "error": str(error),
        "exit_code": error.exit_code,
        "error_context": error.context,
    }
    if isinstance(error, ToolInvocationError):
        payload["tool_output"] = error.output
    return payload
