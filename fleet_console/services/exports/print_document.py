from __future__ import annotations

from datetime import datetime
from typing import List, Mapping, Optional, Tuple

from flask import render_template

from fleet_console.services.exports.rows import ExportError, ExportTable
from fleet_console.services.value_formatter import MISSING, status_color

PRINT_TEMPLATE = "print_report.html"


def _status_class(label: str, extra: Optional[Mapping[str, str]]) -> str:
    return f"status-{status_color(label, extra)}"


def print_cells(table: ExportTable, status_colors: Optional[Mapping[str, str]] = None) -> List[List[Tuple[str, Optional[str]]]]:
    """(text, css class) per cell; only non-empty status cells get a class."""
    status_idx = set(table.status_columns)
    out = []
    for row in table.rows:
        cells = []
        for idx, text in enumerate(row):
            css = None
            if idx in status_idx and text != MISSING:
                css = _status_class(text, status_colors)
            cells.append((text, css))
        out.append(cells)
    return out


def render_print_document(
    table: ExportTable,
    title: str,
    generated_at: datetime,
    status_colors: Optional[Mapping[str, str]] = None,
) -> str:
    """Standalone HTML document that opens the browser print dialog on load.

    Must be called inside an application context.
    """
    try:
        return render_template(
            PRINT_TEMPLATE,
            title=title,
            generated_on=generated_at.strftime("%d-%b-%Y %I:%M %p"),
            headers=table.headers,
            rows=print_cells(table, status_colors),
        )
    except Exception as e:
        raise ExportError(f"Failed to build print document: {e}") from e
