"""Reveal files in the macOS Finder."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from xa_app.api import FileRevealer, NoOpUIAdapter, UIAdapter

logger = logging.getLogger(__name__)


def reveal_script(path: Path) -> str:
    safe_path = str(path).replace('"', '\\"')
    return f'tell application "Finder"\nreveal POSIX file "{safe_path}"\nactivate\nend tell'


class FinderRevealer(FileRevealer):
    """Select a file in a Finder window via AppleScript (best effort)."""

    def __init__(self, osascript: str = "osascript", ui: Optional[UIAdapter] = None) -> None:
        self.osascript = osascript
        self.ui = ui or NoOpUIAdapter()

    def reveal(self, path: Path) -> None:
        try:
            result = subprocess.run(
                [self.osascript, "-e", reveal_script(path)],
                capture_output=True,
                text=True,
            errors="replace",
                timeout=10,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Could not reveal %s: %s", path, exc)
            self.ui.show_warning(f"Could not reveal {path} in Finder: {exc}")
            return
        if result.returncode != 0:
            logger.warning("osascript exited with status %s: %s", result.returncode, result.stderr.strip())
            self.ui.show_warning(f"Could not reveal {path} in Finder")
