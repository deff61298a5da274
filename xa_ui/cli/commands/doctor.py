from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import typer

from xa_app.api import ConfigService, DoctorService, UIAdapter
from xa_common.errors import ConfigurationError
from xa_ui.presenters.doctor import render_doctor_report


def register_doctor_command(app: typer.Typer, ui_provider: Callable[[], UIAdapter]) -> None:
    """Register the doctor command on the given Typer app."""

    @app.command("doctor")
    def doctor(
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            help="Settings file whose tool paths should be checked.",
        ),
    ) -> None:
        """Check that xcodebuild, PlistBuddy, xcrun and zip are installed."""
        ui = ui_provider()
        try:
            settings = ConfigService().load_settings(config)
        except ConfigurationError as exc:
            ui.show_error(str(exc))
            raise typer.Exit(exc.exit_code)
        report = DoctorService(settings.tools).check_all()
        if not render_doctor_report(ui, report):
            raise typer.Exit(1)
