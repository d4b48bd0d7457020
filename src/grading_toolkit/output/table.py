"""
Module: output.table

Purpose:
    Display-ready results table shared by the terminal view and the PDF
    export, plus the correctness-based cell styling rule.

Key Functions:
    - build_results_table(): Project, score and format the roster
    - cell_fill(): Background color for a cell given its tag and row
    - render_text_table(): Plain-text grid for the command line

Styling rule:
    Body rows alternate white / near-white. Correct cells use one of two
    greens and incorrect cells one of two reds, picked by row parity.
    Neutral cells keep the row background.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from grading_toolkit.core.models import (
    EMPTY,
    UNANSWERED_MARK,
    CorrectnessTag,
    ExamMetadata,
    Student,
)
from grading_toolkit.scoring import format_percentage, project_scored

# Palette (hex, shared with the PDF renderer)
ROW_FILLS = ("#ffffff", "#f8fafc")
CORRECT_FILLS = ("#e0f1e0", "#d5e5d5")
INCORRECT_FILLS = ("#ffcaca", "#f2c0c0")
HEADER_FILL = "#f1f5f9"
TEXT_COLOR = "#0f172a"
GRID_COLOR = "#d5d5d5"
LEGEND_FILL = "#f8fafc"

CORRECT_LABEL = "Resposta Certa"
INCORRECT_LABEL = "Resposta Errada"
LEGEND = ((CORRECT_FILLS[1], CORRECT_LABEL), (INCORRECT_FILLS[1], INCORRECT_LABEL))

STUDENTS_HEADER = "Alunos"
AVERAGE_HEADER = "MÉDIA"

_TEXT_MARKS = {
    CorrectnessTag.CORRECT: "+",
    CorrectnessTag.INCORRECT: "x",
    CorrectnessTag.NEUTRAL: " ",
}


def row_fill(row_index: int) -> str:
    return ROW_FILLS[row_index % 2]


def cell_fill(tag: CorrectnessTag, row_index: int) -> str:
    """
    Background for an answer cell.

    Example:
        >>> cell_fill(CorrectnessTag.CORRECT, 0)
        '#e0f1e0'
        >>> cell_fill(CorrectnessTag.NEUTRAL, 1)
        '#f8fafc'
    """
    parity = row_index % 2
    if tag is CorrectnessTag.CORRECT:
        return CORRECT_FILLS[parity]
    if tag is CorrectnessTag.INCORRECT:
        return INCORRECT_FILLS[parity]
    return ROW_FILLS[parity]


@dataclass(frozen=True)
class ResultCell:
    """One answer cell: displayed text, tag and background."""

    text: str
    tag: CorrectnessTag
    fill: str


@dataclass(frozen=True)
class ResultRow:
    name: str
    cells: tuple[ResultCell, ...]
    percentage: int
    fill: str

    @property
    def percentage_text(self) -> str:
        return format_percentage(self.percentage)


@dataclass(frozen=True)
class ResultsTable:
    """
    Results ready for rendering.

    Attributes:
        title: Exam title (or fallback)
        header: "Alunos (n)", "1".."n", "MÉDIA"
        rows: One row per student, in projected order
    """

    title: str
    header: tuple[str, ...]
    rows: tuple[ResultRow, ...]

    @property
    def question_count(self) -> int:
        return len(self.header) - 2

    @property
    def student_count(self) -> int:
        return len(self.rows)


def build_results_table(
    metadata: ExamMetadata,
    key: Sequence[str],
    roster: Iterable[Student],
) -> ResultsTable:
    """
    Build the results table for display and PDF export.

    Empty answers are shown as "-"; letters are shown exactly as stored.

    Args:
        metadata: Exam labels
        key: Answer key slots
        roster: Students in registration order

    Returns:
        ResultsTable with rows in projected order
    """
    scored = project_scored(roster, key)
    rows = []
    for row_index, entry in enumerate(scored):
        cells = tuple(
            ResultCell(
                text=_display(entry.answers[i] if i < len(entry.answers) else EMPTY),
                tag=tag,
                fill=cell_fill(tag, row_index),
            )
            for i, tag in enumerate(entry.per_question)
        )
        rows.append(
            ResultRow(
                name=entry.name,
                cells=cells,
                percentage=entry.percentage,
                fill=row_fill(row_index),
            )
        )

    header = (
        f"{STUDENTS_HEADER} ({len(rows)})",
        *(str(i + 1) for i in range(len(key))),
        AVERAGE_HEADER,
    )
    return ResultsTable(title=metadata.title, header=header, rows=tuple(rows))


def _display(answer: str) -> str:
    return answer if answer != EMPTY else UNANSWERED_MARK


def render_text_table(table: ResultsTable) -> str:
    """
    Render the table as plain text for a terminal.

    Each answer is followed by "+" (correct), "x" (incorrect) or a blank.
    """
    name_width = max([len(table.header[0])] + [len(r.name) for r in table.rows])
    question_width = max(
        [len(h) for h in table.header[1:-1]]
        + [len(c.text) + 1 for r in table.rows for c in r.cells]
        + [2]
    )
    average_width = len(table.header[-1])

    lines = [table.title, ""]
    header_cells = [table.header[0].ljust(name_width)]
    header_cells += [h.center(question_width) for h in table.header[1:-1]]
    header_cells.append(table.header[-1].rjust(average_width))
    lines.append(" | ".join(header_cells))
    lines.append("-+-".join("-" * len(cell) for cell in header_cells))

    for row in table.rows:
        cells = [row.name.ljust(name_width)]
        cells += [(c.text + _TEXT_MARKS[c.tag]).center(question_width) for c in row.cells]
        cells.append(row.percentage_text.rjust(average_width))
        lines.append(" | ".join(cells))

    lines.append("")
    lines.append(f"+ {CORRECT_LABEL}   x {INCORRECT_LABEL}")
    return "\n".join(lines)
