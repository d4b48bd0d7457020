"""
Core Models Package

Data models shared by every other package.

**DESIGN RATIONALE:**

- `Student` and `ExamMetadata` are frozen dataclasses; stores replace
  instances instead of mutating them, so a half-applied update is never
  visible.
- Scores (`ScoredStudent`) are derived on demand and never stored.
"""

from .exam import (
    ANSWER_OPTIONS,
    DEFAULT_QUESTION_COUNT,
    EMPTY,
    FALLBACK_TITLE,
    UNANSWERED_MARK,
    ExamMetadata,
    Student,
    is_answer_value,
    is_key_value,
)
from .scoring import CorrectnessTag, ScoredStudent, ScoreResult
from .snapshot import SessionSnapshot

__all__ = [
    "ANSWER_OPTIONS",
    "DEFAULT_QUESTION_COUNT",
    "EMPTY",
    "FALLBACK_TITLE",
    "UNANSWERED_MARK",
    "ExamMetadata",
    "Student",
    "is_answer_value",
    "is_key_value",
    "CorrectnessTag",
    "ScoredStudent",
    "ScoreResult",
    "SessionSnapshot",
]
