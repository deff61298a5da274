"""Immutable configuration models for a single archive run."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

PLATFORM = "iphoneos"
RELEASE_CONFIGURATION_NAME = "Release"
PROJECT_SUFFIX = ".xcodeproj"
APP_SUFFIX = ".app"
PACKAGE_SUFFIX = ".ipa"


def default_export_path() -> Path:
    return Path.home() / "Desktop"


def expand_path(value: str | os.PathLike[str]) -> Path:
    """Expand ``~`` and make a path absolute without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(value))))


class ToolPaths(BaseModel):
    """Locations of the external tools driven by the pipeline."""

    xcodebuild: str = "/usr/bin/xcodebuild"
    plistbuddy: str = "/usr/libexec/PlistBuddy"
    xcrun: str = "/usr/bin/xcrun"
    zip: str = "zip"
    growlnotify: str = "/usr/local/bin/growlnotify"
    mobileprovision: str = "mobileprovision"
    osascript: str = "osascript"

    model_config = {"frozen": True, "extra": "ignore"}


class RunConfiguration(BaseModel):
    """Resolved options for one invocation; read-only once built."""

    project: Optional[Path] = Field(
        default=None,
        description="Explicit .xcodeproj path; discovered in the working directory when unset.",
    )
    export_path: Path = Field(
        default_factory=default_export_path,
        description="Folder receiving the .ipa and the symbol archive.",
    )
    identity: Optional[str] = Field(
        default=None,
        description="Forced code signing identity; read from the project when unset.",
    )
    mobile_provision: Optional[str] = Field(
        default=None,
        description="Forced provisioning profile to build with and embed.",
    )
    app_path: Optional[Path] = Field(
        default=None,
        description="Pre-built .app bundle; skips the build step when set.",
    )
    keep_symbols: bool = True
    clean: bool = False
    verbose: bool = False
    notify: bool = False
    reveal: bool = False
    tools: ToolPaths = Field(default_factory=ToolPaths)

    model_config = {"frozen": True}

    @property
    def prebuilt(self) -> bool:
        return self.app_path is not None

    @property
    def export_dir(self) -> Path:
        return expand_path(self.export_path)

    def describe(self) -> dict[str, str]:
        """Flatten the options for display."""
        return {
            "project": str(self.project) if self.project else "(discover)",
            "export_path": str(self.export_dir),
            "identity": self.identity if self.identity is not None else "(from project)",
            "mobile_provision": self.mobile_provision or "(embedded)",
            "app_path": str(self.app_path) if self.app_path else "(build from source)",
            "keep_symbols": str(self.keep_symbols),
            "clean": str(self.clean),
            "notify": str(self.notify),
            "reveal": str(self.reveal),
        }
