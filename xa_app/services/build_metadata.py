"""Read signing and version metadata from the project and the built bundle."""

from __future__ import annotations

import errno
import logging
from pathlib import Path

from xa_app.services.run_config import RELEASE_CONFIGURATION_NAME, PLATFORM, RunConfiguration
from xa_app.services.run_types import BuildConfigurationInfo, ProjectDescriptor
from xa_app.services.tools import PlistReader
from xa_common.errors import NoProjectFound, ReleaseConfigurationNotFound

logger = logging.getLogger(__name__)

# The release configuration is trusted to sit at this position in the
# project's build configuration list; it is not searched by name.
RELEASE_CONFIGURATION_INDEX = 1
CODE_SIGN_IDENTITY_KEY = f"CODE_SIGN_IDENTITY[sdk={PLATFORM}*]"
BUNDLE_VERSION_KEY = "CFBundleVersion"


class BuildMetadataExtractor:
    """Walk the pbxproj object graph down to the release signing identity."""

    def __init__(self, reader: PlistReader) -> None:
        self.reader = reader

    def resolve(self, project: ProjectDescriptor, config: RunConfiguration) -> BuildConfigurationInfo:
        """Return the forced identity, or the one recorded in the project."""
        if config.identity is not None:
            logger.debug("Using forced signing identity")
            return BuildConfigurationInfo(identity=config.identity, forced=True)
        return self.extract(project)

    def extract(self, project: ProjectDescriptor) -> BuildConfigurationInfo:
        pbxproj = project.pbxproj
        if pbxproj is None:
            raise NoProjectFound("Error: no Xcode project to read the signing identity from")
        if not pbxproj.is_file():
            raise FileNotFoundError(errno.ENOENT, "Project file not found", str(pbxproj))

        root_id = self._read(pbxproj, "rootObject")
        list_id = self._read(pbxproj, f"objects:{root_id}:buildConfigurationList")
        release_id = self._read(
            pbxproj,
            f"objects:{list_id}:buildConfigurations:{RELEASE_CONFIGURATION_INDEX}",
        )
        name = self._read(pbxproj, f"objects:{release_id}:name")
        if name != RELEASE_CONFIGURATION_NAME:
            raise ReleaseConfigurationNotFound(
                f"Did not find expected configuration - got '{name}' ; "
                f"expected '{RELEASE_CONFIGURATION_NAME}'",
                context={"found": name, "project": project.path},
            )

        identity = self._read(
            pbxproj, f"objects:{release_id}:buildSettings:{CODE_SIGN_IDENTITY_KEY}"
        )
        logger.info("Release configuration %s signs with %r", release_id, identity)
        return BuildConfigurationInfo(identity=identity, configuration_name=name)

    def _read(self, pbxproj: Path, key_path: str) -> str:
        return self.reader.read(pbxproj, key_path)


class BundleVersionReader:
    """Read CFBundleVersion from a built .app bundle."""

    def __init__(self, reader: PlistReader) -> None:
        self.reader = reader

    def read(self, app_path: Path, project_name: str) -> str:
        version = self.reader.read(app_path / "Info.plist", BUNDLE_VERSION_KEY)
        if not version:
            version = self.reader.read(app_path / f"{project_name}-Info.plist", BUNDLE_VERSION_KEY)
        return version
