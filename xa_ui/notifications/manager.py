"""Notification manager orchestrating providers."""

from __future__ import annotations

import logging
from typing import List, Optional

from xa_app.api import NoOpUIAdapter, Notifier, ToolPaths, UIAdapter
from xa_ui.notifications.base import NotificationContext, NotificationProvider
from xa_ui.notifications.providers.desktop import DesktopProvider
from xa_ui.notifications.providers.growl import GrowlProvider

logger = logging.getLogger(__name__)


class NotificationManager(Notifier):
    """Deliver progress alerts through the first available provider.

    Delivery is synchronous and never raises; a missing tool is reported once
    as a warning.
    """

    def __init__(
        self,
        enabled: bool = False,
        tools: Optional[ToolPaths] = None,
        ui: Optional[UIAdapter] = None,
        providers: Optional[List[NotificationProvider]] = None,
        app_name: str = "xcodearchive",
    ) -> None:
        self.enabled = enabled
        self.app_name = app_name
        self.ui = ui or NoOpUIAdapter()
        tools = tools or ToolPaths()
        self._providers: List[NotificationProvider] = (
            providers
            if providers is not None
            else [GrowlProvider(tools.growlnotify), DesktopProvider(tools.osascript)]
        )
        self._warned_missing = False

    def _select_provider(self) -> Optional[NotificationProvider]:
        for provider in self._providers:
            if provider.available():
                return provider
        return None

    def notify(self, title: str, message: str) -> None:
        if not self.enabled:
            return
        provider = self._select_provider()
        if provider is None:
            if not self._warned_missing:
                names = ", ".join(p.name for p in self._providers) or "none configured"
                self.ui.show_warning(f"Did not find a notification command ({names})")
                self._warned_missing = True
            return

        context = NotificationContext(title=title, message=message, app_name=self.app_name)
        try:
            provider.send(context)
        except Exception as exc:
            logger.warning(
                "Failed to send notification via %s: %s", provider.__class__.__name__, exc
            )
