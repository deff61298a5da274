"""Public API surface for xa_ui."""

from xa_ui.cli.main import app, create_controller, main
from xa_ui.notifications.manager import NotificationManager
from xa_ui.services.finder import FinderRevealer
from xa_ui.ui.console import ConsoleUIAdapter

__all__ = [
    "app",
    "main",
    "create_controller",
    "ConsoleUIAdapter",
    "FinderRevealer",
    "NotificationManager",
]
