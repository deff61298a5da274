"""macOS Notification Center provider (osascript)."""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess

from xa_ui.notifications.base import NotificationContext, NotificationProvider

logger = logging.getLogger(__name__)


class DesktopProvider(NotificationProvider):
    """Handles local desktop notifications on macOS."""

    def __init__(self, osascript: str = "osascript"):
        self.osascript = osascript

    @property
    def name(self) -> str:
        return "osascript"

    def available(self) -> bool:
        return platform.system() == "Darwin" and shutil.which(self.osascript) is not None

    def send(self, context: NotificationContext) -> None:
        """Execute AppleScript via osascript."""
        # Basic escaping to prevent syntax errors
        safe_title = context.title.replace('"', '\\"')
        safe_message = context.message.replace('"', '\\"')

        script = (
            f'display notification "{safe_message}" '
            f'with title "{safe_title}" '
            f'subtitle "{context.app_name}"'
        )
        result = subprocess.run(
            [self.osascript, "-e", script],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=5,
        )
        if result.returncode != 0:
            logger.warning("macOS notification failed: %s", result.stderr.strip())
