"""
Module: scoring.projector

Purpose:
    Derive the display order of the roster. The same order is used by the
    terminal table, the CSV export and the PDF export, so all three list
    students identically for identical input.

Key Functions:
    - collation_key(): Locale-aware sort key for a name
    - project(): Sorted tuple of students (roster is not mutated)
    - project_scored(): Sorted tuple of scored students

Ordering:
    Names compare like a Unicode collation with three levels:
    1. base letters, ignoring accents and case ("Álvaro" ~ "alvaro")
    2. accents ("Alvaro" before "Álvaro")
    3. case, lowercase first ("ana" before "Ana")
    `sorted()` is stable, so equal names keep their roster order.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, Sequence

from grading_toolkit.core.models import ScoredStudent, Student

from .engine import score_student


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(name: str) -> tuple[str, str, str]:
    """
    Sort key approximating locale-aware comparison.

    Example:
        >>> sorted(["bruno", "Álvaro", "Ana"], key=collation_key)
        ['Álvaro', 'Ana', 'bruno']
    """
    folded = name.casefold()
    return (
        _strip_marks(folded),
        unicodedata.normalize("NFD", folded),
        name.swapcase(),
    )


def project(roster: Iterable[Student]) -> tuple[Student, ...]:
    """
    Return the roster sorted by name, ascending and stable.

    Args:
        roster: Students in registration order (left untouched)

    Returns:
        New tuple in display order
    """
    return tuple(sorted(roster, key=lambda s: collation_key(s.name)))


def project_scored(roster: Iterable[Student], key: Sequence[str]) -> tuple[ScoredStudent, ...]:
    """Sorted roster with scores computed against `key`."""
    return tuple(score_student(student, key) for student in project(roster))
