"""Desktop and growl notifications for pipeline progress."""

from xa_ui.notifications.base import NotificationContext, NotificationProvider
from xa_ui.notifications.manager import NotificationManager

__all__ = ["NotificationContext", "NotificationManager", "NotificationProvider"]
