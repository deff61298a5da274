"""
Service for checking that the external tools are installed (doctor).
"""

from __future__ import annotations

import os
import platform
import shutil
from pathlib import Path
from typing import Optional

from xa_app.services.doctor_types import DoctorCheckGroup, DoctorCheckItem, DoctorReport
from xa_app.services.run_config import ToolPaths


class DoctorService:
    """Check that the build, packaging and helper tools are reachable."""

    def __init__(self, tools: Optional[ToolPaths] = None):
        self.tools = tools or ToolPaths()

    def _check_command(self, name: str) -> bool:
        if os.sep in name:
            path = Path(name)
            return path.is_file() and os.access(path, os.X_OK)
        return shutil.which(name) is not None

    def _item(self, tool: str, path: str, required: bool) -> DoctorCheckItem:
        return DoctorCheckItem(tool, path, self._check_command(path), required)

    def check_required_tools(self) -> DoctorCheckGroup:
        return DoctorCheckGroup(
            "Build Tools",
            [
                self._item("xcodebuild", self.tools.xcodebuild, True),
                self._item("PlistBuddy", self.tools.plistbuddy, True),
                self._item("xcrun", self.tools.xcrun, True),
                self._item("zip", self.tools.zip, True),
            ],
        )

    def check_optional_tools(self) -> DoctorCheckGroup:
        return DoctorCheckGroup(
            "Optional Helpers",
            [
                self._item("growlnotify", self.tools.growlnotify, False),
                self._item("mobileprovision", self.tools.mobileprovision, False),
                self._item("osascript", self.tools.osascript, False),
            ],
        )

    def check_all(self) -> DoctorReport:
        """Run all checks."""
        info = (
            f"Python: {platform.python_version()} ({platform.python_implementation()}) "
            f"on {platform.system()} {platform.release()}"
        )
        messages = [info]
        if platform.system() != "Darwin":
            messages.append("Xcode tooling is only available on macOS.")
        return DoctorReport(
            groups=[self.check_required_tools(), self.check_optional_tools()],
            info_messages=messages,
        )
