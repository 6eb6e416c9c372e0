"""Landscape PDF table export built with reportlab platypus."""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from fleet_console.services.exports.rows import ExportError, ExportTable

PDF_MIMETYPE = "application/pdf"

HEADER_COLOR = colors.Color(59 / 255, 130 / 255, 246 / 255)
BAND_COLOR = colors.Color(249 / 255, 250 / 255, 251 / 255)
MARGIN = 28


def _cell_style(styles, bold: bool = False) -> ParagraphStyle:
    return ParagraphStyle(
        "GridHeaderCell" if bold else "GridCell",
        parent=styles["BodyText"],
        fontName="Helvetica-Bold" if bold else "Helvetica",
        fontSize=8,
        leading=10,
        textColor=colors.white if bold else colors.black,
    )


def build_pdf(table: ExportTable, title: str, generated_at: datetime) -> bytes:
    """
    Render a landscape A4 report: title, generation timestamp, then the table.

    The header row repeats on every page; reportlab's Table splits long
    tables across pages on its own.
    """
    try:
        buffer = BytesIO()
        page_size = landscape(A4)
        doc = SimpleDocTemplate(
            buffer,
            pagesize=page_size,
            title=title,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
        )
        styles = getSampleStyleSheet()
        header_cell = _cell_style(styles, bold=True)
        body_cell = _cell_style(styles)

        elements = [
            Paragraph(escape(title), styles["Heading2"]),
            Paragraph(f"Generated on: {generated_at.strftime('%d-%b-%Y %I:%M %p')}", styles["BodyText"]),
            Spacer(1, 12),
        ]

        data = [[Paragraph(escape(h), header_cell) for h in table.headers]]
        for row in table.rows:
            data.append([Paragraph(escape(cell), body_cell) for cell in row])

        available = page_size[0] - 2 * MARGIN
        number_width = 32
        other_cols = max(1, len(table.headers) - 1)
        rest = (available - number_width) / other_cols
        col_widths = [number_width] + [rest] * (len(table.headers) - 1)

        grid = Table(data, colWidths=col_widths, repeatRows=1)
        grid.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, BAND_COLOR]),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))
        elements.append(grid)

        doc.build(elements)
        return buffer.getvalue()
    except Exception as e:
        raise ExportError(f"Failed to build PDF: {e}") from e
