"""Growl notification provider (growlnotify)."""

from __future__ import annotations

import logging
import os
import subprocess

from xa_ui.notifications.base import NotificationContext, NotificationProvider

logger = logging.getLogger(__name__)


class GrowlProvider(NotificationProvider):
    """Post a bubble through the ``growlnotify`` command."""

    def __init__(self, executable: str):
        self.executable = executable

    @property
    def name(self) -> str:
        return "growlnotify"

    def available(self) -> bool:
        return os.path.isfile(self.executable) and os.access(self.executable, os.X_OK)

    def send(self, context: NotificationContext) -> None:
        result = subprocess.run(
            [
                self.executable,
                context.title,
                "-m",
                context.message,
                "-d",
                context.identifier,
            ],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=10,
        )
        if result.returncode != 0:
            logger.warning(
                "growlnotify exited with status %s: %s",
                result.returncode,
                result.stderr.strip(),
            )
