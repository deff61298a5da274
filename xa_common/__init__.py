"""Shared helpers for xcodearchive."""

from xa_common.api import XAError, configure_logging

__all__ = ["configure_logging", "XAError"]
