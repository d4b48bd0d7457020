"""
Module: output.pdf_renderer

Purpose:
    Render a ResultsTable to a landscape, paginated PDF using ReportLab.

Key Functions:
    - render_results_pdf(): PDF bytes
    - write_results_pdf(): Write the PDF to disk
    - results_pdf_filename(): Safe file name derived from the exam title
    - build_table_style(): Cell styling commands (exposed for tests)

Layout:
    - Page 1: centered bold title, then a legend box (same width as the
      table) with the "Resposta Certa" / "Resposta Errada" swatches
    - Table: header row repeated on every page, one row per student,
      cells colored by correctness (see output.table.cell_fill)
    - Rows flow onto as many pages as needed; the title and legend are
      only drawn on page 1

Dependencies:
    - reportlab: PDF generation
    - output.table: ResultsTable, palette
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import SimpleDocTemplate, Spacer, Table, TableStyle

from grading_toolkit.config import ExportConfig
from grading_toolkit.core.models import CorrectnessTag

from .table import GRID_COLOR, HEADER_FILL, LEGEND, LEGEND_FILL, TEXT_COLOR, ResultsTable

logger = logging.getLogger(__name__)

# Constants
PAGE_SIZE = landscape(A4)
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
CELL_PADDING = 1.5 * mm
GRID_LINE_WIDTH = 0.1 * mm
LEGEND_CORNER_RADIUS = 1 * mm
LEGEND_TEXT_GAP = 2 * mm
MIN_NAME_COLUMN_WIDTH = 25 * mm

_UNSAFE_FILENAME_CHARS = re.compile(r'[\s/\\:*?"<>|]')


def results_pdf_filename(title: str) -> str:
    """
    File name for the PDF export.

    Example:
        >>> results_pdf_filename("Matemática - 5º Ano/B")
        'Matemática_-_5º_Ano_B_resultados.pdf'
    """
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', title)}_resultados.pdf"


def column_widths(table: ResultsTable, config: ExportConfig, available_width: float) -> list[float]:
    """
    Column widths in points: name, one per question, average.

    Question columns use the configured width and are squeezed (down to the
    configured minimum) when the table would not fit the page.
    """
    size = config.font_size
    name_width = max(
        [stringWidth(table.header[0], FONT_BOLD, size)]
        + [stringWidth(row.name, FONT, size) for row in table.rows]
    ) + 2 * CELL_PADDING
    average_width = max(
        stringWidth(table.header[-1], FONT_BOLD, size),
        stringWidth("100%", FONT_BOLD, size),
    ) + 2 * CELL_PADDING

    count = table.question_count
    question_width = config.question_column_width_mm * mm
    if count and name_width + average_width + count * question_width > available_width:
        squeezed = (available_width - name_width - average_width) / count
        question_width = max(config.min_question_column_width_mm * mm, squeezed)
        overflow = name_width + average_width + count * question_width - available_width
        if overflow > 0:
            name_width = max(MIN_NAME_COLUMN_WIDTH, name_width - overflow)

    return [name_width] + [question_width] * count + [average_width]


def build_table_style(table: ResultsTable, config: ExportConfig) -> list[tuple]:
    """
    TableStyle commands for the results table.

    Row backgrounds are applied first, then correct/incorrect cells paint
    over them; neutral cells keep the row background.
    """
    size = config.font_size
    commands: list[tuple] = [
        ("FONT", (0, 0), (-1, -1), FONT, size),
        ("FONT", (0, 0), (-1, 0), FONT_BOLD, size),
        ("FONT", (-1, 1), (-1, -1), FONT_BOLD, size),
        ("TEXTCOLOR", (0, 0), (-1, -1), colors.HexColor(TEXT_COLOR)),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(HEADER_FILL)),
        ("ALIGN", (0, 0), (0, -1), "LEFT"),
        ("ALIGN", (1, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("GRID", (0, 0), (-1, -1), GRID_LINE_WIDTH, colors.HexColor(GRID_COLOR)),
    ]
    for row_number, row in enumerate(table.rows, start=1):
        commands.append(("BACKGROUND", (0, row_number), (-1, row_number), colors.HexColor(row.fill)))
        for column, cell in enumerate(row.cells, start=1):
            if cell.tag is not CorrectnessTag.NEUTRAL:
                commands.append(
                    ("BACKGROUND", (column, row_number), (column, row_number), colors.HexColor(cell.fill))
                )
    return commands


def render_results_pdf(table: ResultsTable, config: Optional[ExportConfig] = None) -> bytes:
    """
    Render the results table to PDF.

    Args:
        table: Results in projected order (see build_results_table)
        config: Layout options (defaults reproduce the reference layout)

    Returns:
        PDF document bytes

    Example:
        >>> pdf = render_results_pdf(build_results_table(meta, key, roster))
    """
    config = config or ExportConfig()
    page_width, page_height = PAGE_SIZE
    margin = config.margin_mm * mm

    widths = column_widths(table, config, page_width - 2 * margin)
    table_width = sum(widths)

    data = [list(table.header)]
    for row in table.rows:
        data.append([row.name, *(cell.text for cell in row.cells), row.percentage_text])

    flowable = Table(data, colWidths=widths, repeatRows=1, hAlign="LEFT")
    flowable.setStyle(TableStyle(build_table_style(table, config)))

    def _draw_first_page(c: canvas.Canvas, doc: SimpleDocTemplate) -> None:
        _draw_title(c, table.title, config, page_width, page_height)
        _draw_legend(c, config, margin, table_width, page_height)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=margin,
        rightMargin=margin,
        topMargin=margin,
        bottomMargin=margin,
        title=table.title,
    )
    first_page_offset = max(0.0, (config.table_top_mm - config.margin_mm) * mm)
    doc.build([Spacer(1, first_page_offset), flowable], onFirstPage=_draw_first_page)

    logger.debug(f"Rendered {table.student_count} students on {doc.page} page(s)")
    return buffer.getvalue()


def write_results_pdf(path: Path, table: ResultsTable, config: Optional[ExportConfig] = None) -> Path:
    """
    Write the PDF export to `path`.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = render_results_pdf(table, config)
    path.write_bytes(payload)
    logger.info(f"Wrote PDF results for {table.student_count} students to {path}")
    return path


def _draw_title(
    c: canvas.Canvas,
    title: str,
    config: ExportConfig,
    page_width: float,
    page_height: float,
) -> None:
    c.saveState()
    c.setFont(FONT_BOLD, config.title_font_size)
    c.setFillColor(colors.HexColor(TEXT_COLOR))
    c.drawCentredString(page_width / 2, page_height - config.title_top_mm * mm, title)
    c.restoreState()


def _draw_legend(
    c: canvas.Canvas,
    config: ExportConfig,
    x: float,
    width: float,
    page_height: float,
) -> None:
    """Legend box with one swatch + label per correctness color."""
    top = page_height - config.legend_top_mm * mm
    height = config.legend_height_mm * mm
    square = config.legend_square_mm * mm
    center_y = top - height / 2

    c.saveState()
    c.setLineWidth(GRID_LINE_WIDTH)
    c.setStrokeColor(colors.HexColor(GRID_COLOR))
    c.setFillColor(colors.HexColor(LEGEND_FILL))
    c.roundRect(x, top - height, width, height, LEGEND_CORNER_RADIUS, stroke=1, fill=1)

    c.setFont(FONT, config.font_size)
    cursor = x + config.legend_padding_mm * mm
    for fill, label in LEGEND:
        c.setFillColor(colors.HexColor(fill))
        c.rect(cursor, center_y - square / 2, square, square, stroke=1, fill=1)

        text_x = cursor + square + LEGEND_TEXT_GAP
        c.setFillColor(colors.HexColor(TEXT_COLOR))
        # Baseline placed so the glyphs sit centered on the swatch
        c.drawString(text_x, center_y - config.font_size * 0.35, label)
        cursor = text_x + stringWidth(label, FONT, config.font_size) + config.legend_item_gap_mm * mm
    c.restoreState()
