"""Presenters for run parameters and the pipeline outcome."""

from __future__ import annotations

from xa_app.api import PipelineResult, RunConfiguration, UIAdapter
from xa_common.errors import ToolInvocationError


def render_parameters(ui: UIAdapter, config: RunConfiguration) -> None:
    """Show the resolved options before the pipeline starts."""
    rows = [[key, value] for key, value in config.describe().items()]
    ui.show_table("Performing task with options", ["Option", "Value"], rows)


def render_result(ui: UIAdapter, result: PipelineResult, verbose: bool = False) -> None:
    """Print the diagnostic of a failed stage, or a summary of the outputs."""
    if result.error is not None:
        ui.show_error(str(result.error))
        if isinstance(result.error, ToolInvocationError) and result.error.output.strip():
            ui.show_panel(
                result.error.output.rstrip(),
                title=f"Tool output (exit status {result.error.status})",
                border_style="error",
            )
        return

    if not verbose:
        return
    rows = []
    if result.package is not None:
        rows.append(["IPA", str(result.package.path)])
    if result.symbols is not None:
        rows.append(["dSYM archive", str(result.symbols.path)])
        rows.append(["Version", result.symbols.version or "(unknown)"])
    if rows:
        ui.show_table("Outputs", ["Artifact", "Path"], rows)
