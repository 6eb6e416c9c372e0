import csv
from io import StringIO

from fleet_console.services.exports.rows import ExportError, ExportTable

CSV_MIMETYPE = "text/csv; charset=utf-8"


def build_csv(table: ExportTable) -> bytes:
    """RFC-4180 style CSV: every cell quoted, embedded quotes doubled."""
    try:
        output_buffer = StringIO()
        writer = csv.writer(output_buffer, quoting=csv.QUOTE_ALL)
        writer.writerow(table.headers)
        for row in table.rows:
            writer.writerow(row)
        return output_buffer.getvalue().encode("utf-8")
    except Exception as e:
        raise ExportError(f"Failed to build CSV: {e}") from e
