"""Sign the .app and package it as an .ipa with xcrun PackageApplication."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from xa_app.services.build_metadata import BundleVersionReader
from xa_app.services.run_config import PACKAGE_SUFFIX, PLATFORM, RunConfiguration, expand_path
from xa_app.services.run_types import BuildArtifact, PackagedArtifact, ProjectDescriptor
from xa_app.services.tools import CommandRunner
from xa_app.ui_interfaces import (
    FileRevealer,
    NoOpFileRevealer,
    NoOpNotifier,
    NoOpUIAdapter,
    Notifier,
    UIAdapter,
)
from xa_common.errors import PackagingFailed

logger = logging.getLogger(__name__)

EMBEDDED_PROFILE_NAME = "embedded.mobileprovision"


def provisioning_profile_path(artifact: BuildArtifact, config: RunConfiguration) -> Path:
    """Forced profile when given, else the one embedded in the bundle."""
    if config.mobile_provision:
        return Path(config.mobile_provision).expanduser()
    return artifact.path / EMBEDDED_PROFILE_NAME


def package_command(
    xcrun: str,
    app_path: Path,
    ipa_path: Path,
    identity: str,
    profile: Path,
) -> list[str]:
    """Compose the PackageApplication argv; ``--sign`` only for a non-empty identity."""
    argv = [
        xcrun,
        "-sdk",
        PLATFORM,
        "PackageApplication",
        "-v",
        str(app_path),
        "-o",
        str(ipa_path),
    ]
    if identity:
        argv.extend(["--sign", identity])
    argv.extend(["--embed", str(profile)])
    return argv


class Packager:
    """Produce the signed .ipa in the export directory."""

    def __init__(
        self,
        runner: CommandRunner,
        versions: BundleVersionReader,
        ui: UIAdapter | None = None,
        notifier: Notifier | None = None,
        revealer: FileRevealer | None = None,
    ) -> None:
        self.runner = runner
        self.versions = versions
        self.ui = ui or NoOpUIAdapter()
        self.notifier = notifier or NoOpNotifier()
        self.revealer = revealer or NoOpFileRevealer()

    def package(
        self,
        artifact: BuildArtifact,
        project: ProjectDescriptor,
        identity: str,
        config: RunConfiguration,
    ) -> PackagedArtifact:
        profile = provisioning_profile_path(artifact, config)
        if config.verbose:
            self._describe(artifact, project, identity, profile, config)

        self.notifier.notify(
            "Archiving",
            f"Identity: {identity}\nmobileprovision: {profile}",
        )

        export_dir = config.export_dir
        export_dir.mkdir(parents=True, exist_ok=True)
        ipa_path = export_dir / f"{project.name}{PACKAGE_SUFFIX}"

        argv = package_command(config.tools.xcrun, artifact.path, ipa_path, identity, profile)
        if config.verbose:
            self.ui.show_info(f"Archiving:\n {shlex.join(argv)}")

        with self.ui.status(f"Packaging {ipa_path.name}"):
            result = self.runner.run(argv)
        if not result.ok:
            if ipa_path.exists():
                logger.info("Removing partial package %s", ipa_path)
                ipa_path.unlink()
            raise PackagingFailed(
                f"Error in xcrun: exit status {result.returncode}",
                status=result.returncode,
                output=result.output,
                context={"app": artifact.path, "ipa": ipa_path},
            )

        self.ui.show_success("Archiving succeeded: IPA created")
        if config.verbose:
            self.ui.show_info(f"IPA file saved to: '{ipa_path}'")
        logger.info("Packaged %s", ipa_path)

        if config.reveal:
            self.revealer.reveal(ipa_path)
        return PackagedArtifact(path=ipa_path, identity=identity, provisioning_profile=profile)

    def _describe(
        self,
        artifact: BuildArtifact,
        project: ProjectDescriptor,
        identity: str,
        profile: Path,
        config: RunConfiguration,
    ) -> None:
        """Show profile, identity and version details (display only)."""
        tool = config.tools.mobileprovision
        if self.runner.run([tool, "--version"]).ok:
            details = self.runner.run([tool, str(expand_path(profile))])
            self.ui.show_panel(details.output.strip() or "(no output)", title="mobileprovision file info")
        else:
            self.ui.show_warning(
                "mobileprovision command not found. "
                "Unable to give details about the provisioning profile."
            )
        self.ui.show_info(f"Developer identity: {identity}")
        version = self.versions.read(artifact.path, project.name)
        self.ui.show_info(f"Application version number: {version}")
