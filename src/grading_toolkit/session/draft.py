"""
Module: session.draft

Purpose:
    AnswerSheetDraft - the in-progress answer sheet filled in before a
    student is saved to the roster, or while an existing one is edited.
    The buffer follows answer key length changes so a committed draft
    always fits the key.

Key Classes:
    - AnswerSheetDraft
"""

from __future__ import annotations

import logging
from typing import Optional

from grading_toolkit.core.models import ANSWER_OPTIONS, EMPTY, UNANSWERED_MARK, Student
from grading_toolkit.core.schemas.validator import validate_student_name

from .state import ExamSession

logger = logging.getLogger(__name__)


class AnswerSheetDraft:
    """
    Draft buffer for adding or editing one student.

    Attributes:
        name: Name typed so far
        answers: One value per question
        editing_index: Roster index being edited, or None when adding

    Example:
        >>> draft = AnswerSheetDraft(3)
        >>> draft.name = "Ana"
        >>> draft.toggle(0, "A")
        'A'
        >>> draft.commit(session)  # appends Ana, draft is cleared
    """

    def __init__(self, length: int) -> None:
        self.name = ""
        self.answers: list[str] = [EMPTY] * length
        self.editing_index: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_index is not None

    def resize(self, length: int) -> None:
        """Pad with empty answers or truncate to follow the key length."""
        diff = length - len(self.answers)
        if diff > 0:
            self.answers.extend([EMPTY] * diff)
        elif diff < 0:
            del self.answers[length:]

    def toggle(self, index: int, value: str) -> str:
        """
        Toggle an answer slot; choosing the stored value clears it.

        Raises:
            ValueError: If value is not a letter option or "-"
        """
        if value not in ANSWER_OPTIONS and value != UNANSWERED_MARK:
            raise ValueError(f"Invalid answer {value!r}")
        self.answers[index] = EMPTY if self.answers[index] == value else value
        return self.answers[index]

    def begin_edit(self, index: int, student: Student) -> None:
        """Load a roster entry into the draft for editing."""
        self.name = student.name
        self.answers = list(student.answers)
        self.editing_index = index

    def cancel(self) -> None:
        """Discard the draft (and any edit in progress)."""
        length = len(self.answers)
        self.name = ""
        self.answers = [EMPTY] * length
        self.editing_index = None

    def commit(self, session: ExamSession) -> Student:
        """
        Save the draft into the roster and clear it.

        Adds a new student, or replaces the one being edited.

        Raises:
            ValidationError: If the name is blank
        """
        validate_student_name(self.name)
        self.resize(session.answer_key.length)
        student = Student(name=self.name, answers=tuple(self.answers))

        if self.editing_index is not None:
            if not session.roster.update(self.editing_index, student):
                logger.warning(f"Edited student {self.editing_index} no longer exists, adding instead")
                session.roster.add(student.name, student.answers)
        else:
            session.roster.add(student.name, student.answers)

        self.cancel()
        return student

    def student_removed(self, index: int) -> None:
        """
        Keep an edit in progress pointing at the right roster entry.

        Removing the edited student invalidates the edit; removing an
        earlier one shifts the edited index down by one.
        """
        if self.editing_index is None:
            return
        if index == self.editing_index:
            self.cancel()
        elif index < self.editing_index:
            self.editing_index -= 1
