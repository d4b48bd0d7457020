"""
Module: snapshot

Purpose:
    SessionSnapshot - an immutable copy of everything the session persists:
    labels, answer key and roster. Produced by ExamSession.snapshot() and
    consumed by ExamSession.restore() and the JSON serializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exam import DEFAULT_QUESTION_COUNT, EMPTY, ExamMetadata, Student


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Persisted session state (immutable).

    Attributes:
        metadata: Subject / grade labels
        answer_key: One slot per question
        students: Roster in registration order

    Invariants:
        - every student has len(answers) == len(answer_key)
    """

    metadata: ExamMetadata = field(default_factory=ExamMetadata)
    answer_key: tuple[str, ...] = (EMPTY,) * DEFAULT_QUESTION_COUNT
    students: tuple[Student, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.answer_key)

    @classmethod
    def default(cls) -> SessionSnapshot:
        """22 blank questions, empty roster, empty labels."""
        return cls()
