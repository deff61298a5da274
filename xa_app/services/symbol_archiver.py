"""Zip the .dSYM bundle under a version- and time-qualified name."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from xa_app.services.build_executor import BuildWorkspace
from xa_app.services.build_metadata import BundleVersionReader
from xa_app.services.run_config import RunConfiguration
from xa_app.services.run_types import BuildArtifact, ProjectDescriptor, SymbolArchive
from xa_app.services.tools import CommandRunner
from xa_app.ui_interfaces import NoOpNotifier, NoOpUIAdapter, Notifier, UIAdapter
from xa_common.errors import SymbolBundleNotFound

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%Hh%M"
ARCHIVE_SUFFIX = "_symbols.zip"


def symbol_archive_name(project_name: str, version: str, when: datetime) -> str:
    """``<name>_version_<version>_<YYYYmmdd_HHhMM>_symbols.zip``"""
    return f"{project_name}_version_{version}_{when.strftime(TIMESTAMP_FORMAT)}{ARCHIVE_SUFFIX}"


class SymbolArchiver:
    """Compress the debug symbols next to the .ipa."""

    def __init__(
        self,
        runner: CommandRunner,
        versions: BundleVersionReader,
        ui: UIAdapter | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.runner = runner
        self.versions = versions
        self.ui = ui or NoOpUIAdapter()
        self.notifier = notifier or NoOpNotifier()
        self.clock = clock

    def archive(
        self,
        artifact: BuildArtifact,
        project: ProjectDescriptor,
        config: RunConfiguration,
        workspace: BuildWorkspace,
    ) -> Optional[SymbolArchive]:
        if not config.keep_symbols:
            logger.info("Symbol archiving disabled")
            return None

        self.ui.show_info("Archiving the dSYM symbols")

        version = self.versions.read(artifact.path, project.name)
        archive_path = config.export_dir / symbol_archive_name(project.name, version, self.clock())
        self.notifier.notify("dSYM symbols", f"Archiving the dSYM symbols into {archive_path}")

        bundle = workspace.dsym_path(project.name)
        if not bundle.exists():
            raise SymbolBundleNotFound(
                "Error: Could not find your dSYM file.\n"
                "Try again with the --no-symbols option.",
                context={"expected": bundle},
            )

        status = self._zip(config.tools.zip, bundle, archive_path)
        self.ui.show_success(f"dSYM symbols archived into {archive_path}")
        return SymbolArchive(path=archive_path, version=version, zip_status=status)

    def _zip(self, zip_tool: str, bundle: Path, archive_path: Path) -> int:
        # Running from the bundle's parent keeps the build root out of the archive.
        with self.ui.status("Compressing dSYM symbols"):
            result = self.runner.run(
                [zip_tool, "-r", "-T", "-y", str(archive_path), bundle.name],
                cwd=bundle.parent,
            )
        if not result.ok:
            # Not a pipeline failure: the status is reported, the run still succeeds.
            logger.warning("zip exited with status %s: %s", result.returncode, result.output.strip())
            self.ui.show_warning(
                f"zip exited with status {result.returncode}; "
                f"{archive_path.name} may be missing or incomplete."
            )
        return result.returncode
