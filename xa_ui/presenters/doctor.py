"""Presenter for Doctor Reports."""

from __future__ import annotations

from xa_app.api import DoctorReport, UIAdapter


def render_doctor_report(ui: UIAdapter, report: DoctorReport) -> bool:
    """
    Render a doctor report to the provided UI.

    Returns True when all required checks passed.
    """
    for group in report.groups:
        rows = [[item.label, "✓" if item.ok else "✗"] for item in group.items]
        ui.show_table(group.title, ["Item", "Status"], rows)

    for msg in report.info_messages:
        ui.show_info(msg)

    if report.total_failures > 0:
        ui.show_error(f"Found {report.total_failures} failures.")
        return False

    ui.show_success("All checks passed.")
    return True
