"""Stable application-layer API surface."""

from xa_app.services.build_executor import BuildExecutor, BuildWorkspace
from xa_app.services.build_metadata import BuildMetadataExtractor, BundleVersionReader
from xa_app.services.config_service import ArchiveSettings, ConfigRepository, ConfigService
from xa_app.services.doctor_service import DoctorService
from xa_app.services.doctor_types import (
    DoctorCheckGroup,
    DoctorCheckItem,
    DoctorReport,
)
from xa_app.services.packager import Packager
from xa_app.services.pipeline import PipelineController
from xa_app.services.project_locator import ProjectLocator
from xa_app.services.run_config import RunConfiguration, ToolPaths
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
from xa_app.services.tools import PlistBuddyReader, ToolResult, ToolRunner
from xa_app.ui_interfaces import (
    FileRevealer,
    NoOpFileRevealer,
    NoOpNotifier,
    NoOpUIAdapter,
    Notifier,
    UIAdapter,
)

__all__ = [
    "ArchiveSettings",
    "ConfigRepository",
    "ConfigService",
    "RunConfiguration",
    "ToolPaths",
    "ProjectLocator",
    "BuildMetadataExtractor",
    "BundleVersionReader",
    "BuildExecutor",
    "BuildWorkspace",
    "Packager",
    "SymbolArchiver",
    "PipelineController",
    "PipelineResult",
    "PipelineStage",
    "ProjectDescriptor",
    "BuildConfigurationInfo",
    "BuildArtifact",
    "PackagedArtifact",
    "SymbolArchive",
    "ToolRunner",
    "ToolResult",
    "PlistBuddyReader",
    "UIAdapter",
    "Notifier",
    "FileRevealer",
    "NoOpUIAdapter",
    "NoOpNotifier",
    "NoOpFileRevealer",
    "DoctorService",
    "DoctorCheckGroup",
    "DoctorCheckItem",
    "DoctorReport",
]
