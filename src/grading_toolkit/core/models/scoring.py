"""
Module: scoring (models)

Purpose:
    Derived scoring models. Never persisted: always recomputed from the
    current answer key and roster so scores cannot go stale when the key
    changes after students were registered.

Key Classes:
    - CorrectnessTag: Per-question classification driving cell colors
    - ScoreResult: Output of the scoring engine for one answer vector
    - ScoredStudent: Student + ScoreResult

Dependencies:
    - dataclasses (std), enum (std)
    - .exam.Student
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exam import Student


class CorrectnessTag(str, Enum):
    """Classification of one answer against one key slot."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    NEUTRAL = "neutral"  # answer or key slot empty


@dataclass(frozen=True)
class ScoreResult:
    """
    Score for one answer vector.

    Attributes:
        percentage: Integer in [0, 100]
        correct_count: Number of CORRECT tags
        per_question: One tag per key slot
    """

    percentage: int
    correct_count: int
    per_question: tuple[CorrectnessTag, ...]

    def __post_init__(self) -> None:
        if not 0 <= self.percentage <= 100:
            raise ValueError(f"percentage out of range: {self.percentage}")


@dataclass(frozen=True)
class ScoredStudent:
    """A student together with its computed score."""

    student: Student
    score: ScoreResult

    @property
    def name(self) -> str:
        return self.student.name

    @property
    def answers(self) -> tuple[str, ...]:
        return self.student.answers

    @property
    def percentage(self) -> int:
        return self.score.percentage

    @property
    def per_question(self) -> tuple[CorrectnessTag, ...]:
        return self.score.per_question
