from __future__ import annotations

import io
import re

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from fleet_console.services.exports.rows import ExportError, ExportTable

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
MAX_COLUMN_WIDTH = 50

HEADER_FILL = PatternFill(start_color="3B82F6", end_color="3B82F6", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")

_SHEET_TITLE_BAD_CHARS = re.compile(r"[\\/*?:\[\]]")


def _sheet_title(title: str) -> str:
    cleaned = _SHEET_TITLE_BAD_CHARS.sub(" ", title).strip()
    return (cleaned or "Sheet")[:31]


def column_widths(table: ExportTable) -> list:
    """Per-column width: longest content + 2, capped at MAX_COLUMN_WIDTH."""
    widths = []
    for idx, header in enumerate(table.headers):
        max_len = max([len(header)] + [len(row[idx]) for row in table.rows])
        widths.append(min(max_len + 2, MAX_COLUMN_WIDTH))
    return widths


def build_workbook(table: ExportTable, sheet_title: str) -> bytes:
    """Single-sheet XLSX of the header + rows. Returns the complete file bytes."""
    try:
        wb = Workbook()
        ws = wb.active
        ws.title = _sheet_title(sheet_title)

        ws.append(table.headers)
        for cell in ws[1]:
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center")

        for row_idx, row in enumerate(table.rows, start=2):
            for col_idx, value in enumerate(row, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                # keep "=..." cell text literal instead of a formula
                if value.startswith("="):
                    cell.data_type = "s"

        for col, width in enumerate(column_widths(table), start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

        ws.freeze_panes = "A2"

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
    except Exception as e:
        raise ExportError(f"Failed to build spreadsheet: {e}") from e
