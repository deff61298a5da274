"""Resolve the single Xcode project a run operates on."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from xa_app.services.run_config import (
    APP_SUFFIX,
    PROJECT_SUFFIX,
    RunConfiguration,
    expand_path,
)
from xa_app.services.run_types import ProjectDescriptor
from xa_common.errors import AmbiguousProject, NoProjectFound

logger = logging.getLogger(__name__)


def strip_suffix(name: str, suffix: str) -> str:
    if name.endswith(suffix) and name != suffix:
        return name[: -len(suffix)]
    return name


def find_project_containers(search_dir: Path) -> list[Path]:
    """Return the visible ``*.xcodeproj`` entries directly under ``search_dir``."""
    return sorted(
        entry
        for entry in search_dir.glob(f"*{PROJECT_SUFFIX}")
        if not entry.name.startswith(".")
    )


class ProjectLocator:
    """Pick the project from an explicit path or by scanning one directory."""

    def __init__(self, search_dir: Optional[Path] = None) -> None:
        self._search_dir = search_dir

    @property
    def search_dir(self) -> Path:
        return self._search_dir or Path.cwd()

    def locate(self, config: RunConfiguration) -> ProjectDescriptor:
        if config.project is not None:
            path: Optional[Path] = expand_path(config.project)
        elif config.prebuilt and config.identity is not None:
            # Nothing downstream reads the project in this mode.
            path = None
        else:
            path = self.discover()

        name = self.project_name(config, path)
        logger.info("Working with project %s (%s)", name, path)
        return ProjectDescriptor(path=path, name=name)

    def discover(self) -> Path:
        search_dir = self.search_dir
        matches = find_project_containers(search_dir)
        if not matches:
            raise NoProjectFound(
                f"Error: 0 Xcode projects found in {search_dir}",
                context={"directory": search_dir},
            )
        if len(matches) != 1:
            raise AmbiguousProject(
                f"Error: The directory {search_dir} contains {len(matches)} projects "
                f"(file with the extension {PROJECT_SUFFIX}). "
                "Specify the project to use with the --project option.",
                context={"directory": search_dir, "count": len(matches)},
            )
        return expand_path(matches[0])

    @staticmethod
    def project_name(config: RunConfiguration, path: Optional[Path]) -> str:
        if config.app_path is not None:
            return strip_suffix(expand_path(config.app_path).name, APP_SUFFIX)
        if path is None:
            raise NoProjectFound("Error: no Xcode project to take the name from")
        return strip_suffix(path.name, PROJECT_SUFFIX)
