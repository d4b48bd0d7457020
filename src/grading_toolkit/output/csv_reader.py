"""
Module: output.csv_reader

Purpose:
    Import a results CSV (the format written by `csv_writer`) back into a
    SessionSnapshot. Loosely-typed rows are validated and coerced into
    strict key/student shapes here, before anything reaches a store.

Key Functions:
    - parse_results_csv(): Parse bytes or text
    - read_results_csv(): Read and parse a file

Key Classes:
    - CsvImportError: Base class for import failures
    - ImportFormatError: Marker rows missing or values malformed
    - ImportIOError: Underlying read failure

Lookup rules:
    - Disciplina / Serie / Gabarito / Alunos rows are found by an exact
      match on their first column, in any order
    - Key length = number of columns after "Gabarito"
    - Students = rows after "Alunos" with a name and at least one more
      column; only as many answer columns as the key has are read
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from grading_toolkit.core.models import (
    EMPTY,
    ExamMetadata,
    SessionSnapshot,
    Student,
    is_answer_value,
    is_key_value,
)

from .csv_writer import BOM, GRADE_LABEL, KEY_LABEL, SUBJECT_LABEL
from .table import STUDENTS_HEADER

logger = logging.getLogger(__name__)

REQUIRED_LABELS = (SUBJECT_LABEL, GRADE_LABEL, KEY_LABEL, STUDENTS_HEADER)


class CsvImportError(Exception):
    """Base class for CSV import failures. The session is never touched."""
    pass


class ImportFormatError(CsvImportError):
    """The file is not a results CSV (marker rows missing, bad values)."""

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.row = row
        self.column = column


class ImportIOError(CsvImportError):
    """The file could not be read."""
    pass


def read_results_csv(path: Path) -> SessionSnapshot:
    """
    Read and parse a results CSV file.

    Args:
        path: File to import

    Returns:
        SessionSnapshot with labels, key and students from the file

    Raises:
        ImportIOError: If the file cannot be read
        ImportFormatError: If the content is not a valid results CSV
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ImportIOError(f"Could not read {path}: {e}") from e

    snapshot = parse_results_csv(data)
    logger.info(
        f"Imported {Path(path).name}: {snapshot.question_count} questions, "
        f"{len(snapshot.students)} students"
    )
    return snapshot


def parse_results_csv(data: Union[bytes, str]) -> SessionSnapshot:
    """
    Parse a results CSV payload.

    Raises:
        ImportFormatError: If marker rows are missing or values are invalid
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ImportFormatError(f"File is not UTF-8 text: {e}") from e
    else:
        text = data[len(BOM):] if data.startswith(BOM) else data

    try:
        rows = list(csv.reader(io.StringIO(text, newline="")))
    except csv.Error as e:
        raise ImportFormatError(f"Malformed CSV: {e}") from e

    positions = {label: _find_row(rows, label) for label in REQUIRED_LABELS}
    missing = [label for label, index in positions.items() if index is None]
    if missing:
        raise ImportFormatError(
            "Invalid CSV format. The file must contain the rows "
            "'Disciplina', 'Serie', 'Gabarito' and 'Alunos' "
            f"(missing: {', '.join(missing)})."
        )

    subject_row = rows[positions[SUBJECT_LABEL]]
    grade_row = rows[positions[GRADE_LABEL]]
    key_index = positions[KEY_LABEL]
    header_index = positions[STUDENTS_HEADER]

    key = tuple(_coerce(v) for v in rows[key_index][1:])
    if not key:
        raise ImportFormatError("The 'Gabarito' row has no questions.", row=key_index + 1)
    _check_values(key, key_index, is_key_value, "answer key")

    students = []
    for offset, row in enumerate(rows[header_index + 1:], start=header_index + 1):
        if len(row) <= 1 or not row[0].strip():
            continue
        answers = [_coerce(v) for v in row[1: 1 + len(key)]]
        answers.extend([EMPTY] * (len(key) - len(answers)))
        _check_values(answers, offset, is_answer_value, f"answers of {row[0]!r}")
        students.append(Student(name=row[0], answers=tuple(answers)))

    return SessionSnapshot(
        metadata=ExamMetadata(subject=_cell(subject_row, 1), grade=_cell(grade_row, 1)),
        answer_key=key,
        students=tuple(students),
    )


def _find_row(rows: list[list[str]], label: str) -> Optional[int]:
    for index, row in enumerate(rows):
        if row and row[0] == label:
            return index
    return None


def _cell(row: Sequence[str], column: int) -> str:
    return row[column] if len(row) > column else ""


def _coerce(value: str) -> str:
    return value.strip()


def _check_values(values: Sequence[str], row_index: int, accepts, what: str) -> None:
    for column, value in enumerate(values, start=1):
        if not accepts(value):
            raise ImportFormatError(
                f"Invalid value {value!r} in {what} (row {row_index + 1}, column {column + 1}).",
                row=row_index + 1,
                column=column + 1,
            )
