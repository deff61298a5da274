"""Value objects produced by the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from xa_common.errors import XAError, error_to_payload


class PipelineStage(str, Enum):
    """Ordered pipeline states."""

    LOCATE = "locate"
    EXTRACT_METADATA = "extract_metadata"
    BUILD = "build"
    PACKAGE = "package"
    ARCHIVE_SYMBOLS = "archive_symbols"
    DONE = "done"


@dataclass(frozen=True)
class ProjectDescriptor:
    """The project container a run operates on.

    ``path`` is None only for pre-built runs that never need to read the
    project (forced identity, no explicit project).
    """

    path: Optional[Path]
    name: str

    @property
    def pbxproj(self) -> Optional[Path]:
        if self.path is None:
            return None
        return self.path / "project.pbxproj"


@dataclass(frozen=True)
class BuildConfigurationInfo:
    """Release configuration name and the identity used for signing."""

    identity: str
    configuration_name: Optional[str] = None
    forced: bool = False


@dataclass(frozen=True)
class BuildArtifact:
    """Compiled .app bundle."""

    path: Path
    prebuilt: bool = False


@dataclass(frozen=True)
class PackagedArtifact:
    """Signed .ipa written to the export directory."""

    path: Path
    identity: str
    provisioning_profile: Path


@dataclass(frozen=True)
class SymbolArchive:
    """Zip of the .dSYM bundle."""

    path: Path
    version: str
    zip_status: int = 0


@dataclass(frozen=True)
class PipelineResult:
    """Final state of a run."""

    stage: PipelineStage
    exit_code: int
    project: Optional[ProjectDescriptor] = None
    build_info: Optional[BuildConfigurationInfo] = None
    artifact: Optional[BuildArtifact] = None
    package: Optional[PackagedArtifact] = None
    symbols: Optional[SymbolArchive] = None
    build_root: Optional[Path] = None
    error: Optional[XAError] = field(default=None, compare=False)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict[str, Any]:
        def _path(value: Any) -> Optional[str]:
            return str(value.path) if value is not None and value.path else None

        payload: dict[str, Any] = {
            "success": self.success,
            "stage": self.stage.value,
            "exit_code": self.exit_code,
            "project": _path(self.project),
            "project_name": self.project.name if self.project else None,
            "identity": self.build_info.identity if self.build_info else None,
            "app": _path(self.artifact),
            "ipa": _path(self.package),
            "symbols": _path(self.symbols),
            "version": self.symbols.version if self.symbols else None,
            "build_root": str(self.build_root) if self.build_root else None,
        }
        if self.error is not None:
            payload.update(error_to_payload(self.error))
        return payload
