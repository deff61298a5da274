"""
Command-line interface for xcodearchive.

Builds the Xcode project of the current folder, packages the app as a signed
.ipa and zips the dSYM symbols next to it.

Examples:

  xcodearchive                                => build, create the ipa and zip the dSYM symbols
  xcodearchive -n                             => same, without keeping the symbols
  xcodearchive -o ~/Documents/my_archives -s  => save the ipa in the given folder and reveal it in Finder
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from xa_app import __version__
from xa_app.api import ConfigService, PipelineController, RunConfiguration, UIAdapter
from xa_common.api import configure_logging
from xa_common.errors import ConfigurationError
from xa_ui.cli.commands.doctor import register_doctor_command
from xa_ui.notifications.manager import NotificationManager
from xa_ui.presenters.run import render_parameters, render_result
from xa_ui.services.finder import FinderRevealer
from xa_ui.ui.console import ConsoleUIAdapter

app = typer.Typer(
    help="Build an Xcode project, package a signed .ipa and archive its dSYM symbols.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def create_ui() -> UIAdapter:
    return ConsoleUIAdapter()


def create_controller(config: RunConfiguration, ui: UIAdapter) -> PipelineController:
    """Wire the pipeline with the console, notifications and Finder reveal."""
    notifier = NotificationManager(enabled=config.notify, tools=config.tools, ui=ui)
    revealer = FinderRevealer(config.tools.osascript, ui=ui)
    return PipelineController.create(config, ui=ui, notifier=notifier, revealer=revealer)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Version {__version__}")
        raise typer.Exit()


def _flag(value: bool) -> Optional[bool]:
    """Map an unset switch to None so lower configuration layers apply."""
    return True if value else None


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version number.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Output more information."),
    growl: bool = typer.Option(
        False,
        "-g",
        "--growl",
        help="Show growl alerts to inform about progress of the build.",
    ),
    no_symbols: bool = typer.Option(
        False,
        "-n",
        "--no-symbols",
        "--do_not_keep_dsym_symbols",
        help="Do not keep the dSYM symbols.",
    ),
    show: bool = typer.Option(False, "-s", "--show", help="Show archive in Finder once created."),
    clean: bool = typer.Option(
        False, "-c", "--clean", help="Do a clean before building the Xcode project."
    ),
    ipa_export_path: Optional[Path] = typer.Option(
        None,
        "-o",
        "--ipa-export-path",
        "--ipa_export_path",
        help="Folder where the ipa will be saved. Default is '~/Desktop'.",
    ),
    identity: Optional[str] = typer.Option(
        None,
        "-i",
        "--identity",
        "--developper_identity",
        help="Force the code signing identity.",
    ),
    mobile_provision: Optional[str] = typer.Option(
        None,
        "-m",
        "--mobile-provision",
        "--mobile_provision",
        help="Force the provisioning profile to use.",
    ),
    archive_from_app_path: Optional[Path] = typer.Option(
        None,
        "-a",
        "--archive-from-app-path",
        "--archive_from_app_path",
        help="Create the ipa from an existing .app instead of building.",
    ),
    project: Optional[Path] = typer.Option(
        None, "-p", "--project", help="Xcode project to build (.xcodeproj)."
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="YAML settings file with default options and tool paths."
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    json_summary: Optional[Path] = typer.Option(
        None, "--json-summary", help="Write a JSON summary of the run to this file."
    ),
) -> None:
    """Build, package and archive the Xcode project."""
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(level="INFO" if verbose else None, debug=debug, force=True)
    ui = create_ui()

    try:
        run_config = ConfigService().build_run_configuration(
            config,
            project=project,
            export_path=ipa_export_path,
            identity=identity,
            mobile_provision=mobile_provision,
            app_path=archive_from_app_path,
            keep_symbols=False if no_symbols else None,
            clean=_flag(clean),
            notify=_flag(growl),
            reveal=_flag(show),
            verbose=verbose,
        )
    except ConfigurationError as exc:
        ui.show_error(str(exc))
        raise typer.Exit(exc.exit_code)

    if run_config.verbose:
        render_parameters(ui, run_config)

    result = create_controller(run_config, ui).run(run_config)
    render_result(ui, result, verbose=run_config.verbose)

    if json_summary is not None:
        json_summary.parent.mkdir(parents=True, exist_ok=True)
        json_summary.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")

    raise typer.Exit(result.exit_code)


register_doctor_command(app, lambda: create_ui())


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
