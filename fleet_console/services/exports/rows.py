from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from fleet_console.models.grid import FieldDescriptor, FieldType
from fleet_console.services.record_access import resolve
from fleet_console.services.value_formatter import format_for_export

ROW_NUMBER_HEADER = "No"
ACTIONS_HEADER = "Actions"


class ExportError(Exception):
    """Raised when an export artifact could not be built in full."""


@dataclass
class ExportTable:
    """Header + FormattedRows, built once and shared by every export channel."""
    headers: List[str]
    rows: List[List[str]]
    status_columns: List[int] = field(default_factory=list)

    def with_actions(self) -> "ExportTable":
        """Same table with a trailing, empty Actions column."""
        return ExportTable(
            headers=self.headers + [ACTIONS_HEADER],
            rows=[row + [""] for row in self.rows],
            status_columns=list(self.status_columns),
        )


def format_row(
    record: Mapping[str, Any],
    fields: Sequence[FieldDescriptor],
    number: int,
    tz: Optional[tzinfo] = None,
) -> List[str]:
    row = [str(number)]
    for f in fields:
        row.append(format_for_export(f.key, resolve(record, f.path), f.type, tz=tz))
    return row


def build_export_rows(
    records: Iterable[Mapping[str, Any]],
    fields: Sequence[FieldDescriptor],
    tz: Optional[tzinfo] = None,
) -> ExportTable:
    """Format the full (filtered + sorted) record set for export.

    Any failure is re-raised as ExportError so callers never see a half-built table.
    """
    try:
        headers = [ROW_NUMBER_HEADER] + [f.label for f in fields]
        rows = [format_row(r, fields, i, tz) for i, r in enumerate(records, start=1)]
    except Exception as e:
        raise ExportError(f"Failed to build export rows: {e}") from e

    status_columns = [i + 1 for i, f in enumerate(fields) if f.type == FieldType.STATUS]
    return ExportTable(headers=headers, rows=rows, status_columns=status_columns)


def export_filename(entity_type: str, extension: str, today: date) -> str:
    return f"{entity_type}-{today.isoformat()}.{extension}"
