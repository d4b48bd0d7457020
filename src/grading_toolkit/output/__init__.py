"""
Module: output

Purpose:
    Results rendering: display table, CSV export/import and PDF export.
    Every renderer consumes the same projected order, so the terminal
    table, the CSV file and the PDF list students identically.

Key Functions:
    - build_results_table(): Display-ready rows and cell colors
    - render_results_csv() / write_results_csv(): CSV export
    - parse_results_csv() / read_results_csv(): CSV import
    - render_results_pdf() / write_results_pdf(): PDF export

Dependencies:
    - reportlab: PDF generation
    - csv (std): Delimited text
"""

from .csv_reader import (
    CsvImportError,
    ImportFormatError,
    ImportIOError,
    parse_results_csv,
    read_results_csv,
)
from .csv_writer import render_results_csv, results_csv_rows, write_results_csv
from .pdf_renderer import render_results_pdf, results_pdf_filename, write_results_pdf
from .table import ResultsTable, build_results_table, cell_fill, render_text_table

__all__ = [
    "CsvImportError",
    "ImportFormatError",
    "ImportIOError",
    "parse_results_csv",
    "read_results_csv",
    "render_results_csv",
    "results_csv_rows",
    "write_results_csv",
    "render_results_pdf",
    "results_pdf_filename",
    "write_results_pdf",
    "ResultsTable",
    "build_results_table",
    "cell_fill",
    "render_text_table",
]
