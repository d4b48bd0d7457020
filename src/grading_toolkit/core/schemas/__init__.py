"""Validation for session snapshots and stage gates."""

from .validator import (
    SNAPSHOT_SCHEMA_VERSION,
    ValidationError,
    validate_metadata,
    validate_snapshot,
    validate_student_name,
)

__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "ValidationError",
    "validate_metadata",
    "validate_snapshot",
    "validate_student_name",
]
