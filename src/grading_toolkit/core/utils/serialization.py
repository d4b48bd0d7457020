"""
Serialization Utilities

Provides to/from JSON utilities for the session snapshot.

- `serialize_snapshot` / `deserialize_snapshot` convert between
  SessionSnapshot and plain dictionaries.
- Validation runs before deserialization so malformed data never reaches
  a store.
- Scores are never stored; they are always recalculated on load.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.exam import ExamMetadata, Student
from ..models.snapshot import SessionSnapshot
from ..schemas.validator import SNAPSHOT_SCHEMA_VERSION, validate_snapshot


def serialize_snapshot(snapshot: SessionSnapshot) -> dict[str, Any]:
    """
    Serialize a SessionSnapshot to a dictionary.

    The output can be written to JSON and will pass `validate_snapshot`.
    """
    return {
        "version": SNAPSHOT_SCHEMA_VERSION,
        "question_count": snapshot.question_count,
        "answer_key": list(snapshot.answer_key),
        "students": [student.to_dict() for student in snapshot.students],
        "subject": snapshot.metadata.subject,
        "grade": snapshot.metadata.grade,
    }


def deserialize_snapshot(data: dict[str, Any], *, validate: bool = True) -> SessionSnapshot:
    """
    Deserialize a SessionSnapshot from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the shape first

    Returns:
        SessionSnapshot instance

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_snapshot(data)

    return SessionSnapshot(
        metadata=ExamMetadata(subject=data["subject"], grade=data["grade"]),
        answer_key=tuple(data["answer_key"]),
        students=tuple(Student.from_dict(item) for item in data["students"]),
    )


def load_snapshot_json(path: Path) -> SessionSnapshot:
    """
    Load and validate a snapshot file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not JSON
        ValidationError: If the payload has the wrong shape
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    return deserialize_snapshot(data)


def save_snapshot_json(snapshot: SessionSnapshot, path: Path) -> None:
    """
    Write a snapshot file with atomic replacement.

    Writes to a sibling temp file first so an interrupted write never
    leaves a truncated snapshot behind.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(".tmp")
    try:
        temp_path.write_text(
            json.dumps(serialize_snapshot(snapshot), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        temp_path.replace(path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
