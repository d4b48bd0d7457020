"""
Schema Validation Utilities

Validates session payloads before they are turned into store state.

- `validate_metadata()` gates the move from key definition to the roster
  stage.
- `validate_snapshot()` checks a persisted JSON snapshot; the snapshot
  store treats any failure as "no snapshot" and falls back to defaults.
- Fail fast on the first violation, reporting the offending path.
"""

from __future__ import annotations

from typing import Any

from ..models.exam import ExamMetadata, is_answer_value, is_key_value


# Snapshot format version written by SnapshotStore
SNAPSHOT_SCHEMA_VERSION = 1


class ValidationError(Exception):
    """Raised when data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_metadata(metadata: ExamMetadata) -> None:
    """
    Require both metadata labels before the roster stage.

    Raises:
        ValidationError: If subject or grade is blank
    """
    missing = []
    if not metadata.subject.strip():
        missing.append("subject")
    if not metadata.grade.strip():
        missing.append("grade")
    if missing:
        raise ValidationError(
            "Fill in the subject and the grade/class to continue.",
            path=missing[0],
            errors=[f"Missing field: {f}" for f in missing],
        )


def validate_student_name(name: str) -> None:
    """Raises ValidationError if the student name is blank."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Enter the student's name.", path="name")


def validate_snapshot(data: Any) -> None:
    """
    Validate a snapshot dictionary.

    Expected shape::

        {
            "version": 1,
            "question_count": 22,
            "answer_key": ["A", "", ...],
            "students": [{"name": "Ana", "answers": ["A", "-", ...]}],
            "subject": "...",
            "grade": "..."
        }

    Args:
        data: Parsed JSON payload

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Snapshot must be a JSON object")

    required = ["question_count", "answer_key", "students", "subject", "grade"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("version", SNAPSHOT_SCHEMA_VERSION)
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported snapshot version: {version} (expected {SNAPSHOT_SCHEMA_VERSION})",
            path="version",
        )

    count = data["question_count"]
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise ValidationError(
            f"Invalid question_count: {count!r} (must be a positive integer)",
            path="question_count",
        )

    for label in ("subject", "grade"):
        if not isinstance(data[label], str):
            raise ValidationError(f"{label} must be a string", path=label)

    key = data["answer_key"]
    _validate_vector(key, count, "answer_key", is_key_value)

    students = data["students"]
    if not isinstance(students, list):
        raise ValidationError("students must be a list", path="students")
    for i, student in enumerate(students):
        _validate_student(student, count, f"students[{i}]")


def _validate_student(data: Any, count: int, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("student must be an object", path=path)
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid student name: {name!r}", path=f"{path}.name")
    _validate_vector(data.get("answers"), count, f"{path}.answers", is_answer_value)


def _validate_vector(values: Any, count: int, path: str, accepts) -> None:
    if not isinstance(values, list):
        raise ValidationError(f"{path} must be a list", path=path)
    if len(values) != count:
        raise ValidationError(
            f"{path} has {len(values)} entries (expected {count})",
            path=path,
        )
    for i, value in enumerate(values):
        if not isinstance(value, str) or not accepts(value):
            raise ValidationError(
                f"Invalid value {value!r}",
                path=f"{path}[{i}]",
            )
