"""Sequence the archive stages and map failures to exit codes.

Locate -> ExtractMetadata -> Build -> Package -> ArchiveSymbols. The first
failure halts the run; nothing is retried or rolled back.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from xa_app.services.build_executor import BuildExecutor, BuildWorkspace
from xa_app.services.build_metadata import BuildMetadataExtractor, BundleVersionReader
from xa_app.services.packager import Packager
from xa_app.services.project_locator import ProjectLocator
from xa_app.services.run_config import RunConfiguration
from xa_app.services.run_types import (
    BuildArtifact,
    BuildConfigurationInfo,
    PackagedArtifact,
    PipelineResult,
    PipelineStage,
    ProjectDescriptor,
    SymbolArchive,
)
from xa_app.services.symbol_archiver import SymbolArchiver
from xa_app.services.tools import CommandRunner, PlistBuddyReader, PlistReader, ToolRunner
from xa_app.ui_interfaces import (
    FileRevealer,
    NoOpFileRevealer,
    NoOpNotifier,
    NoOpUIAdapter,
    Notifier,
    UIAdapter,
)
from xa_common.errors import XAError, wrap_error

logger = logging.getLogger(__name__)


class PipelineController:
    """Own the stages and the per-run build workspace."""

    def __init__(
        self,
        locator: ProjectLocator,
        metadata: BuildMetadataExtractor,
        builder: BuildExecutor,
        packager: Packager,
        archiver: SymbolArchiver,
        ui: UIAdapter | None = None,
    ) -> None:
        self.locator = locator
        self.metadata = metadata
        self.builder = builder
        self.packager = packager
        self.archiver = archiver
        self.ui = ui or NoOpUIAdapter()

    @classmethod
    def create(
        cls,
        config: RunConfiguration,
        *,
        runner: CommandRunner | None = None,
        reader: PlistReader | None = None,
        locator: ProjectLocator | None = None,
        ui: UIAdapter | None = None,
        notifier: Notifier | None = None,
        revealer: FileRevealer | None = None,
    ) -> "PipelineController":
        """Wire the default stages around the configured tool paths."""
        runner = runner or ToolRunner()
        reader = reader or PlistBuddyReader(runner, config.tools.plistbuddy)
        ui = ui or NoOpUIAdapter()
        notifier = notifier or NoOpNotifier()
        revealer = revealer or NoOpFileRevealer()
        versions = BundleVersionReader(reader)
        return cls(
            locator=locator or ProjectLocator(),
            metadata=BuildMetadataExtractor(reader),
            builder=BuildExecutor(runner, ui=ui, notifier=notifier),
            packager=Packager(runner, versions, ui=ui, notifier=notifier, revealer=revealer),
            archiver=SymbolArchiver(runner, versions, ui=ui, notifier=notifier),
            ui=ui,
        )

    def run(
        self,
        config: RunConfiguration,
        workspace: BuildWorkspace | None = None,
    ) -> PipelineResult:
        workspace = workspace or BuildWorkspace()
        stage = PipelineStage.LOCATE
        project: Optional[ProjectDescriptor] = None
        build_info: Optional[BuildConfigurationInfo] = None
        artifact: Optional[BuildArtifact] = None
        package: Optional[PackagedArtifact] = None
        symbols: Optional[SymbolArchive] = None

        def _result(stage: PipelineStage, exit_code: int, error: XAError | None = None) -> PipelineResult:
            return PipelineResult(
                stage=stage,
                exit_code=exit_code,
                project=project,
                build_info=build_info,
                artifact=artifact,
                package=package,
                symbols=symbols,
                build_root=workspace.root if workspace.created else None,
                error=error,
            )

        try:
            project = self.locator.locate(config)
            structlog.contextvars.bind_contextvars(project=project.name)
            if config.verbose:
                self.ui.show_info(f"Working with project: {project.name}")

            stage = PipelineStage.EXTRACT_METADATA
            build_info = self.metadata.resolve(project, config)

            stage = PipelineStage.BUILD
            artifact = self.builder.build(project, config, workspace)

            stage = PipelineStage.PACKAGE
            package = self.packager.package(artifact, project, build_info.identity, config)

            stage = PipelineStage.ARCHIVE_SYMBOLS
            symbols = self.archiver.archive(artifact, project, config, workspace)
        except XAError as exc:
            logger.error("Stage %s failed: %s", stage.value, exc)
            return _result(stage, exc.exit_code, exc)
        except OSError as exc:
            error = wrap_error(XAError, f"I/O error during {stage.value}: {exc}", cause=exc)
            logger.error("Stage %s failed: %s", stage.value, exc)
            return _result(stage, error.exit_code, error)
        finally:
            structlog.contextvars.unbind_contextvars("project")

        logger.info("Pipeline finished for %s", project.name)
        return _result(PipelineStage.DONE, 0)
