"""Build the project with xcodebuild into a per-run temporary directory."""

from __future__ import annotations

import logging
import shlex
import tempfile
from pathlib import Path
from typing import Callable, Optional

from xa_app.services.run_config import APP_SUFFIX, PLATFORM, RunConfiguration, expand_path
from xa_app.services.run_types import BuildArtifact, ProjectDescriptor
from xa_app.services.tools import CommandRunner
from xa_app.ui_interfaces import NoOpNotifier, NoOpUIAdapter, Notifier, UIAdapter
from xa_common.errors import BuildFailed, CleanFailed

logger = logging.getLogger(__name__)


class BuildWorkspace:
    """Temporary build root shared by the stages of one run.

    The directory is created on first access and never removed; the OS
    reclaims it with the rest of the temp area.
    """

    def __init__(self, factory: Callable[[], str] | None = None) -> None:
        self._factory = factory or (lambda: tempfile.mkdtemp(prefix="xcodearchive-"))
        self._root: Optional[Path] = None

    @property
    def created(self) -> bool:
        return self._root is not None

    @property
    def root(self) -> Path:
        if self._root is None:
            self._root = Path(self._factory())
            logger.debug("Created build root %s", self._root)
        return self._root

    @property
    def products_dir(self) -> Path:
        return self.root / f"Release-{PLATFORM}"

    def app_path(self, project_name: str) -> Path:
        return self.products_dir / f"{project_name}{APP_SUFFIX}"

    def dsym_path(self, project_name: str) -> Path:
        return self.products_dir / f"{project_name}{APP_SUFFIX}.dSYM"


class BuildExecutor:
    """Run ``xcodebuild`` (optionally after a clean) unless the app is pre-built."""

    def __init__(
        self,
        runner: CommandRunner,
        ui: UIAdapter | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.runner = runner
        self.ui = ui or NoOpUIAdapter()
        self.notifier = notifier or NoOpNotifier()

    def build(
        self,
        project: ProjectDescriptor,
        config: RunConfiguration,
        workspace: BuildWorkspace,
    ) -> BuildArtifact:
        if config.app_path is not None:
            app = expand_path(config.app_path)
            logger.info("Using pre-built application %s", app)
            return BuildArtifact(path=app, prebuilt=True)

        xcodebuild = config.tools.xcodebuild
        build_root = workspace.root
        if config.verbose:
            self.ui.show_info(f"Using temporary path for build: {build_root}")

        build_command = [
            xcodebuild,
            "-project",
            str(project.path),
            f"SYMROOT={build_root}",
        ]
        if config.mobile_provision:
            build_command.append(f"PROVISIONING_PROFILE={config.mobile_provision}")

        if config.verbose:
            self.ui.show_info(f"Building:\n{shlex.join(build_command)}")
        self.notifier.notify("Building", f"Building Xcode project {project.path}")

        if config.clean:
            self._clean(xcodebuild, project, config)

        with self.ui.status(f"Building {project.name}"):
            result = self.runner.run(build_command)
        if not result.ok:
            raise BuildFailed(
                f"Error in xcodebuild: exit status {result.returncode}",
                status=result.returncode,
                output=result.output,
                context={"project": project.path},
            )

        app = workspace.app_path(project.name)
        logger.info("Build finished: %s", app)
        return BuildArtifact(path=app)

    def _clean(self, xcodebuild: str, project: ProjectDescriptor, config: RunConfiguration) -> None:
        if config.verbose:
            self.ui.show_info("Cleaning Xcode project")
        with self.ui.status(f"Cleaning {project.name}"):
            result = self.runner.run([xcodebuild, "-project", str(project.path), "clean"])
        if not result.ok:
            raise CleanFailed(
                f"Error in xcodebuild (clean): exit status {result.returncode}",
                status=result.returncode,
                output=result.output,
                context={"project": project.path},
            )
