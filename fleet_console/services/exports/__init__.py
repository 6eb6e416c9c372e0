from .rows import (
    ACTIONS_HEADER,
    ROW_NUMBER_HEADER,
    ExportError,
    ExportTable,
    build_export_rows,
    export_filename,
)
from .csv_export import CSV_MIMETYPE, build_csv
from .pdf_table import PDF_MIMETYPE, build_pdf
from .print_document import print_cells, render_print_document
from .spreadsheet import XLSX_MIMETYPE, build_workbook, column_widths

__all__ = [
    "ACTIONS_HEADER",
    "ROW_NUMBER_HEADER",
    "ExportError",
    "ExportTable",
    "build_export_rows",
    "export_filename",
    "CSV_MIMETYPE",
    "build_csv",
    "PDF_MIMETYPE",
    "build_pdf",
    "print_cells",
    "render_print_document",
    "XLSX_MIMETYPE",
    "build_workbook",
    "column_widths",
]
