"""
Module: exam

Purpose:
    Provides the exam-level data models: ExamMetadata (labels) and Student
    (one registered answer sheet), plus the answer alphabet shared by the
    answer key, the roster and the import boundary.

Key Classes:
    - ExamMetadata: Subject and grade/class labels
    - Student: Name + answer vector (immutable)

Key Functions:
    - is_key_value(): Check a value allowed in an answer key slot
    - is_answer_value(): Check a value allowed in a student answer slot

Dependencies:
    - dataclasses (std)

Used By:
    - session.state: AnswerKeyStore / RosterStore
    - scoring.engine, scoring.projector
    - output.*: exporters and importer
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence


ANSWER_OPTIONS: tuple[str, ...] = ("A", "B", "C", "D", "E")
UNANSWERED_MARK = "-"
EMPTY = ""

DEFAULT_QUESTION_COUNT = 22
FALLBACK_TITLE = "Resultados da Prova"


def is_key_value(value: str) -> bool:
    """
    Check whether a value may be stored in an answer key slot.

    Letters are accepted in either case; the stored value keeps its case.
    """
    return value == EMPTY or value.upper() in ANSWER_OPTIONS


def is_answer_value(value: str) -> bool:
    """Check whether a value may be stored in a student answer slot."""
    return value == UNANSWERED_MARK or is_key_value(value)


@dataclass(frozen=True)
class ExamMetadata:
    """
    Labels printed on exports (immutable).

    Attributes:
        subject: Subject name ("Disciplina")
        grade: Grade or class ("Serie")

    Example:
        >>> ExamMetadata("Matemática", "5º Ano B").title
        'Matemática - 5º Ano B'
        >>> ExamMetadata().title
        'Resultados da Prova'
    """

    subject: str = ""
    grade: str = ""

    @property
    def is_complete(self) -> bool:
        """True when both labels are filled in (non-blank)."""
        return bool(self.subject.strip()) and bool(self.grade.strip())

    @property
    def title(self) -> str:
        """Exam title used by the PDF export and the results table."""
        if self.is_complete:
            return f"{self.subject} - {self.grade}"
        return FALLBACK_TITLE


@dataclass(frozen=True)
class Student:
    """
    One registered answer sheet (immutable).

    Identity is positional: the roster index, not the name, addresses a
    student. Answers keep the literal stored value (case included).

    Attributes:
        name: Student name, non-blank
        answers: One value per question: a letter, "" or "-"

    Invariants:
        - len(answers) == length of the answer key (enforced by RosterStore)
    """

    name: str
    answers: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence from callers, store a tuple
        if not isinstance(self.answers, tuple):
            object.__setattr__(self, "answers", tuple(self.answers))

    @classmethod
    def blank(cls, name: str, length: int) -> Student:
        """Create a student with `length` empty answers."""
        return cls(name=name, answers=(EMPTY,) * length)

    def resized(self, length: int) -> Student:
        """Return a copy padded with empty answers or truncated to `length`."""
        current = len(self.answers)
        if length == current:
            return self
        if length > current:
            return replace(self, answers=self.answers + (EMPTY,) * (length - current))
        return replace(self, answers=self.answers[:length])

    def with_answers(self, answers: Sequence[str]) -> Student:
        return replace(self, answers=tuple(answers))

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "answers": list(self.answers)}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Student:
        return cls(name=str(data["name"]), answers=tuple(data.get("answers", ())))  # type: ignore[arg-type]
