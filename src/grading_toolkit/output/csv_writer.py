"""
Module: output.csv_writer

Purpose:
    Serialize results to the delimited text format that `csv_reader`
    imports back.

Key Functions:
    - results_csv_rows(): Row structure, before encoding
    - render_results_csv(): UTF-8 payload prefixed with a BOM
    - write_results_csv(): Write the payload to disk

Format (rows, in order):
    Disciplina,<subject>
    Serie,<grade>
    Gabarito,<key 1>,...,<key n>
    <blank>
    Alunos,1,...,n,MÉDIA
    <name>,<answer 1>,...,<answer n>,<percentage>%

Answers are written exactly as stored (an empty answer stays empty).
Rows are CRLF-separated with minimal quoting and no trailing newline.
The BOM lets spreadsheet applications detect the UTF-8 encoding.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Sequence

from grading_toolkit.core.models import ExamMetadata, Student
from grading_toolkit.scoring import format_percentage, project_scored

from .table import AVERAGE_HEADER, STUDENTS_HEADER

logger = logging.getLogger(__name__)

SUBJECT_LABEL = "Disciplina"
GRADE_LABEL = "Serie"
KEY_LABEL = "Gabarito"
BOM = "\ufeff"
LINE_TERMINATOR = "\r\n"


def results_csv_rows(
    metadata: ExamMetadata,
    key: Sequence[str],
    roster: Iterable[Student],
) -> list[list[str]]:
    """
    Build the CSV rows.

    Students appear in projected (sorted) order, same as the PDF export.
    """
    rows: list[list[str]] = [
        [SUBJECT_LABEL, metadata.subject],
        [GRADE_LABEL, metadata.grade],
        [KEY_LABEL, *key],
        [],
        [STUDENTS_HEADER, *(str(i + 1) for i in range(len(key))), AVERAGE_HEADER],
    ]
    for entry in project_scored(roster, key):
        rows.append([entry.name, *entry.answers, format_percentage(entry.percentage)])
    return rows


def render_results_csv(
    metadata: ExamMetadata,
    key: Sequence[str],
    roster: Iterable[Student],
) -> bytes:
    """
    Render the CSV payload.

    Returns:
        UTF-8 bytes starting with a byte-order mark
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR)
    writer.writerows(results_csv_rows(metadata, key, roster))

    text = buffer.getvalue()
    if text.endswith(LINE_TERMINATOR):
        text = text[: -len(LINE_TERMINATOR)]
    return (BOM + text).encode("utf-8")


def write_results_csv(
    path: Path,
    metadata: ExamMetadata,
    key: Sequence[str],
    roster: Iterable[Student],
) -> Path:
    """
    Write the CSV export to `path`.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = render_results_csv(metadata, key, roster)
    path.write_bytes(payload)
    logger.info(f"Wrote CSV results ({len(payload)} bytes) to {path}")
    return path
