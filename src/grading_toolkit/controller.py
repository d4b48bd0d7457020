"""
Module: controller

Purpose:
    Orchestrate exports and imports for a session.
    Session → Score → Project → Render → Write

Key Functions:
    - export_results(): Write CSV and/or PDF results for a session
    - import_results(): Parse a results CSV and apply it to a session

Key Classes:
    - ExportResult: Paths and counts of a completed export
    - ExportError: Exception for export failures

Used By:
    - cli: Command-line front end
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from grading_toolkit.core.models import SessionSnapshot

from .config import ExportConfig
from .output import (
    build_results_table,
    read_results_csv,
    results_pdf_filename,
    write_results_csv,
    write_results_pdf,
)
from .session import ExamSession

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("csv", "pdf")


class ExportError(Exception):
    """Error during export."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Completed export (immutable).

    Attributes:
        csv_path: Path to the CSV file (if generated)
        pdf_path: Path to the PDF file (if generated)
        title: Exam title used for the PDF
        student_count: Rows exported
        question_count: Questions in the answer key
    """

    csv_path: Optional[Path]
    pdf_path: Optional[Path]
    title: str
    student_count: int
    question_count: int


def export_results(
    session: ExamSession,
    output_dir: Path,
    formats: Sequence[str] = SUPPORTED_FORMATS,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export the session results.

    Args:
        session: Session to export
        output_dir: Directory receiving the files
        formats: Any of "csv", "pdf"
        config: Export options

    Returns:
        ExportResult with the written paths

    Raises:
        ExportError: If the roster is empty, a format is unknown or a file
            cannot be written

    Example:
        >>> result = export_results(session, Path("output"))
        >>> print(result.pdf_path)
    """
    config = config or ExportConfig()
    unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unknown:
        raise ExportError(f"Unsupported export format(s): {unknown}")
    if not formats:
        raise ExportError("No export format selected")
    if len(session.roster) == 0:
        raise ExportError("No students registered yet; add students before exporting.")

    start_time = time.perf_counter()
    metadata = session.metadata
    key = session.answer_key.slots
    students = session.roster.students
    output_dir = Path(output_dir)

    csv_path = pdf_path = None
    try:
        if "csv" in formats:
            csv_path = write_results_csv(output_dir / config.csv_filename, metadata, key, students)
        if "pdf" in formats:
            table = build_results_table(metadata, key, students)
            pdf_path = write_results_pdf(output_dir / results_pdf_filename(table.title), table, config)
    except OSError as e:
        raise ExportError(f"Failed to write results: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exported {len(students)} students ({', '.join(formats)}) in {elapsed:.2f}s")
    return ExportResult(
        csv_path=csv_path,
        pdf_path=pdf_path,
        title=metadata.title,
        student_count=len(students),
        question_count=len(key),
    )


def import_results(session: ExamSession, csv_path: Path) -> SessionSnapshot:
    """
    Replace the session contents with a results CSV.

    Either every parsed field takes effect or none does.

    Raises:
        ImportIOError: If the file cannot be read
        ImportFormatError: If the file is not a results CSV
    """
    snapshot = read_results_csv(Path(csv_path))
    session.restore(snapshot)
    return snapshot
