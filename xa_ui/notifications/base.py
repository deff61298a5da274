"""Base interface for notification providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationContext:
    """Context data for a notification event."""

    title: str
    message: str
    app_name: str
    identifier: str = "archivingBubble"


class NotificationProvider(ABC):
    """Abstract base class for a notification delivery mechanism."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short label used in warnings."""

    @abstractmethod
    def available(self) -> bool:
        """Return True when the delivery tool is installed."""

    @abstractmethod
    def send(self, context: NotificationContext) -> None:
        """Deliver the notification based on the provided context."""
