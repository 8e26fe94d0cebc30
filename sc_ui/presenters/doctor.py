"""Presenter for Doctor Reports."""

from __future__ import annotations

from typing import List

from sc_app.api import DoctorReport
from sc_ui.tui.system.models import TableModel
from sc_ui.tui.system.protocols import UI


def build_doctor_tables(report: DoctorReport) -> List[TableModel]:
    """Transform a DoctorReport into a list of TableModels."""
    tables = []
    for group in report.groups:
        rows = [
            [
                item.label,
                "✓" if item.ok else "✗",
                "required" if item.required else "optional",
                item.detail,
            ]
            for item in group.items
        ]
        tables.append(
            TableModel(
                title=group.title,
                columns=["Item", "Status", "Need", "Detail"],
                rows=rows,
            )
        )
    return tables


def render_doctor_report(ui: UI, report: DoctorReport) -> bool:
    """
    Render a doctor report to the provided UI.

    Returns True when all required checks passed.
    """
    for table in build_doctor_tables(report):
        ui.tables.show(table)

    for msg in report.info_messages:
        ui.present.info(msg)

    if report.total_failures > 0:
        ui.present.error(f"Found {report.total_failures} failures.")
        return False

    ui.present.success("All checks passed.")
    return True
