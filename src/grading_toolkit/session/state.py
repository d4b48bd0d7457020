"""
Module: session.state

Purpose:
    Explicit session state shared by every front end. All mutations of the
    answer key and the roster go through the operations here; nothing else
    writes the fields directly.

Key Classes:
    - RosterStore: Ordered list of Student records
    - AnswerKeyStore: Ordered answer key, owns the question count
    - ExamSession: Metadata + key + roster, saves a snapshot after every
      successful mutation

Invariants:
    - every student has len(answers) == len(answer key) >= 1
    - each public mutation builds the complete new state before assigning
      it, so a failed call leaves the session untouched

Dependencies:
    - core.models: Student, ExamMetadata, SessionSnapshot
    - core.schemas.validator: validate_metadata

Used By:
    - session.draft, session.store
    - controller, cli
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Sequence

from grading_toolkit.core.models import (
    ANSWER_OPTIONS,
    EMPTY,
    ExamMetadata,
    SessionSnapshot,
    Student,
    is_answer_value,
    is_key_value,
)
from grading_toolkit.core.schemas.validator import validate_metadata

if TYPE_CHECKING:
    from .store import SnapshotStore

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


def _noop() -> None:
    pass


class RosterStore:
    """
    Registered students in registration order.

    Identity is positional: removing index i shifts every later student
    down by one.
    """

    def __init__(
        self,
        question_count: int,
        students: Sequence[Student] = (),
        on_change: ChangeCallback = _noop,
    ) -> None:
        self._question_count = question_count
        self._students: list[Student] = [s.resized(question_count) for s in students]
        self._on_change = on_change

    # ─────────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def students(self) -> tuple[Student, ...]:
        return tuple(self._students)

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self) -> Iterator[Student]:
        return iter(tuple(self._students))

    def __getitem__(self, index: int) -> Student:
        return self._students[index]

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def add(self, name: str, answers: Sequence[str]) -> Student:
        """
        Append a new student.

        Args:
            name: Non-blank student name
            answers: One value per question (letter, "" or "-")

        Returns:
            The stored Student

        Raises:
            ValueError: If the name is blank or the answers don't fit the key
        """
        student = Student(name=name, answers=tuple(answers))
        self._check(student)
        self._students = self._students + [student]
        logger.debug(f"Added student {name!r} at index {len(self._students) - 1}")
        self._on_change()
        return student

    def update(self, index: int, student: Student) -> bool:
        """
        Replace the student at `index` in place.

        Returns:
            False (and leaves the roster untouched) if index is out of range

        Raises:
            ValueError: If the replacement doesn't fit the key
        """
        if not 0 <= index < len(self._students):
            logger.warning(f"Ignoring update of student {index}: out of range")
            return False
        self._check(student)
        updated = list(self._students)
        updated[index] = student
        self._students = updated
        logger.debug(f"Updated student {index} ({student.name!r})")
        self._on_change()
        return True

    def remove(self, index: int) -> Optional[Student]:
        """
        Delete the student at `index`; later students shift down by one.

        Returns:
            The removed Student, or None if index is out of range
        """
        if not 0 <= index < len(self._students):
            logger.warning(f"Ignoring removal of student {index}: out of range")
            return None
        removed = self._students[index]
        self._students = self._students[:index] + self._students[index + 1:]
        logger.debug(f"Removed student {index} ({removed.name!r})")
        self._on_change()
        return removed

    def clear(self) -> None:
        """Empty the roster. The answer key is not touched."""
        self._students = []
        logger.debug("Cleared roster")
        self._on_change()

    # ─────────────────────────────────────────────────────────────────────────
    # Internal (driven by AnswerKeyStore / ExamSession)
    # ─────────────────────────────────────────────────────────────────────────

    def _resized(self, length: int) -> list[Student]:
        return [s.resized(length) for s in self._students]

    def _assign(self, students: list[Student], question_count: int) -> None:
        self._students = students
        self._question_count = question_count

    def _check(self, student: Student) -> None:
        if not student.name.strip():
            raise ValueError("Student name must not be blank")
        if len(student.answers) != self._question_count:
            raise ValueError(
                f"Expected {self._question_count} answers, got {len(student.answers)}"
            )
        invalid = [a for a in student.answers if not is_answer_value(a)]
        if invalid:
            raise ValueError(f"Invalid answer values: {invalid}")


class AnswerKeyStore:
    """
    The answer key: one slot per question, letter or empty.

    Owns the question count. Every length change is applied to the key and
    to every student answer vector in the same step.
    """

    def __init__(
        self,
        roster: RosterStore,
        slots: Sequence[str],
        on_change: ChangeCallback = _noop,
    ) -> None:
        if len(slots) < 1:
            raise ValueError("Answer key needs at least one question")
        self._roster = roster
        self._slots: tuple[str, ...] = tuple(slots)
        self._on_change = on_change
        self._roster._assign(self._roster._resized(len(self._slots)), len(self._slots))

    @property
    def slots(self) -> tuple[str, ...]:
        return self._slots

    @property
    def length(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> str:
        return self._slots[index]

    def set_length(self, new_length: int) -> None:
        """
        Grow or shrink the key, keeping every student vector in sync.

        Growing appends empty slots; shrinking truncates from the end.

        Raises:
            ValueError: If new_length < 1
        """
        if new_length < 1:
            raise ValueError(f"Question count must be at least 1: {new_length}")
        current = len(self._slots)
        if new_length == current:
            return

        if new_length > current:
            slots = self._slots + (EMPTY,) * (new_length - current)
        else:
            slots = self._slots[:new_length]
        students = self._roster._resized(new_length)

        self._slots = slots
        self._roster._assign(students, new_length)
        logger.debug(f"Answer key resized {current} -> {new_length}")
        self._on_change()

    def add_question(self) -> None:
        self.set_length(len(self._slots) + 1)

    def remove_question(self) -> None:
        """Drop the last question; no-op when only one is left."""
        if len(self._slots) > 1:
            self.set_length(len(self._slots) - 1)

    def set_slot(self, index: int, letter: str) -> str:
        """
        Toggle a key slot.

        Selecting the letter already stored (in either case) clears the
        slot instead.

        Args:
            index: 0-based question index
            letter: One of ANSWER_OPTIONS

        Returns:
            The new slot value

        Raises:
            ValueError: If letter is not an answer option
            IndexError: If index is out of range
        """
        if letter not in ANSWER_OPTIONS:
            raise ValueError(f"Invalid answer option {letter!r}; expected one of {ANSWER_OPTIONS}")
        if not 0 <= index < len(self._slots):
            raise IndexError(f"Question index out of range: {index}")

        value = EMPTY if self._slots[index].upper() == letter else letter
        slots = list(self._slots)
        slots[index] = value
        self._slots = tuple(slots)
        self._on_change()
        return value

    def _assign(self, slots: tuple[str, ...]) -> None:
        self._slots = slots


class ExamSession:
    """
    Session state passed explicitly to every component.

    Mutations go through `answer_key`, `roster` and the methods below.
    When a SnapshotStore is attached, a snapshot is saved after every
    successful mutation.

    Example:
        >>> session = ExamSession()
        >>> session.answer_key.set_length(3)
        >>> session.answer_key.set_slot(0, "A")
        'A'
        >>> session.roster.add("Ana", ["A", "", "-"])
        Student(name='Ana', answers=('A', '', '-'))
    """

    def __init__(
        self,
        snapshot: Optional[SessionSnapshot] = None,
        store: Optional[SnapshotStore] = None,
    ) -> None:
        snapshot = snapshot or SessionSnapshot.default()
        self._store = store
        self._metadata = snapshot.metadata
        self.roster = RosterStore(snapshot.question_count, snapshot.students, on_change=self._commit)
        self.answer_key = AnswerKeyStore(self.roster, snapshot.answer_key, on_change=self._commit)

    @classmethod
    def open(cls, store: SnapshotStore) -> ExamSession:
        """
        Load the stored snapshot (or defaults) and attach the store.

        Every mutation then saves on its own. Use SnapshotStore.session()
        instead when other processes may write the same snapshot.
        """
        return cls(store.load(), store=store)

    # ─────────────────────────────────────────────────────────────────────────
    # Metadata
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def metadata(self) -> ExamMetadata:
        return self._metadata

    def set_metadata(self, subject: Optional[str] = None, grade: Optional[str] = None) -> None:
        """Update one or both labels; None keeps the current value."""
        self._metadata = ExamMetadata(
            subject=self._metadata.subject if subject is None else subject,
            grade=self._metadata.grade if grade is None else grade,
        )
        self._commit()

    def require_metadata(self) -> None:
        """
        Gate for leaving the key-definition stage.

        Raises:
            ValidationError: If subject or grade is blank
        """
        validate_metadata(self._metadata)

    # ─────────────────────────────────────────────────────────────────────────
    # Whole-session operations
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            metadata=self._metadata,
            answer_key=self.answer_key.slots,
            students=self.roster.students,
        )

    def restore(self, snapshot: SessionSnapshot) -> None:
        """
        Replace labels, key and roster in one step (used by import).

        Raises:
            ValueError: If the snapshot key is empty or a student doesn't fit
        """
        count = snapshot.question_count
        if count < 1:
            raise ValueError("Answer key needs at least one question")
        invalid = [v for v in snapshot.answer_key if not is_key_value(v)]
        if invalid:
            raise ValueError(f"Invalid answer key values: {invalid}")
        candidate = RosterStore(count)
        for student in snapshot.students:
            candidate._check(student)

        self._metadata = snapshot.metadata
        self.answer_key._assign(tuple(snapshot.answer_key))
        self.roster._assign(list(snapshot.students), count)
        logger.debug(f"Session restored: {count} questions, {len(snapshot.students)} students")
        self._commit()

    def reset(self) -> None:
        """Clear key, roster and labels back to their defaults."""
        self.restore(SessionSnapshot.default())

    def _commit(self) -> None:
        # SnapshotSaveError propagates to the caller of the mutation
        if self._store is not None:
            self._store.save(self.snapshot())
