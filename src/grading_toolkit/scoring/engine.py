"""
Module: scoring.engine

Purpose:
    Compare a student's answer vector against the answer key.

Key Functions:
    - score(): Per-question tags + aggregate percentage
    - score_student(): Same, wrapped as a ScoredStudent
    - format_percentage(): "67%" rendering shared by table and exports

Rules:
    - CORRECT: both values non-empty and equal ignoring case
    - INCORRECT: both values non-empty and different
    - NEUTRAL: either value empty
    - percentage = correct / len(key) * 100, rounded half away from zero;
      an empty key scores 0

Pure functions: inputs are never mutated and no I/O happens here.
"""

from __future__ import annotations

from typing import Sequence

from grading_toolkit.core.models import EMPTY, CorrectnessTag, ScoredStudent, ScoreResult, Student


def tag_answer(answer: str, key_value: str) -> CorrectnessTag:
    """Classify one answer against one key slot."""
    if answer == EMPTY or key_value == EMPTY:
        return CorrectnessTag.NEUTRAL
    if answer.upper() == key_value.upper():
        return CorrectnessTag.CORRECT
    return CorrectnessTag.INCORRECT


def percentage_of(correct: int, total: int) -> int:
    """
    Integer percentage rounded half away from zero.

    Uses integer arithmetic so 1/8 (12.5%) reliably rounds to 13.

    Example:
        >>> percentage_of(2, 3)
        67
        >>> percentage_of(0, 0)
        0
    """
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def score(answers: Sequence[str], key: Sequence[str]) -> ScoreResult:
    """
    Score one answer vector.

    Slots missing from a short answer vector count as empty.

    Args:
        answers: Student answers, one per question
        key: Answer key slots

    Returns:
        ScoreResult with one tag per key slot

    Example:
        >>> score(["a"], ["A"]).percentage
        100
    """
    tags = tuple(
        tag_answer(answers[i] if i < len(answers) else EMPTY, key_value)
        for i, key_value in enumerate(key)
    )
    correct = sum(1 for tag in tags if tag is CorrectnessTag.CORRECT)
    return ScoreResult(
        percentage=percentage_of(correct, len(key)),
        correct_count=correct,
        per_question=tags,
    )


def score_student(student: Student, key: Sequence[str]) -> ScoredStudent:
    return ScoredStudent(student=student, score=score(student.answers, key))


def format_percentage(percentage: int) -> str:
    return f"{percentage}%"
