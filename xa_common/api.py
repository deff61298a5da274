"""Public API surface for xa_common."""

from xa_common.errors import (
    AmbiguousProject,
    BuildFailed,
    CleanFailed,
    ConfigurationError,
    NoProjectFound,
    PackagingFailed,
    ReleaseConfigurationNotFound,
    SymbolBundleNotFound,
    ToolInvocationError,
    XAError,
    error_to_payload,
)
from xa_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "error_to_payload",
    "XAError",
    "ConfigurationError",
    "NoProjectFound",
    "AmbiguousProject",
    "ReleaseConfigurationNotFound",
    "ToolInvocationError",
    "CleanFailed",
    "BuildFailed",
    "PackagingFailed",
    "SymbolBundleNotFound",
]
