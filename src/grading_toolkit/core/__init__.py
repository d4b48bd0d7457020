"""
Grading Toolkit Core Package

Shared data models, validation and snapshot serialization.

**DESIGN NOTES:**

1. **Immutable Records**
   - Students and metadata are frozen dataclasses.
   - Stores swap whole records so every mutation is all-or-nothing.

2. **Calculated Scores (Never Stored)**
   - Percentages and correctness tags are derived from the current key.
   - The snapshot holds only the key, roster and labels.

3. **Validation at the Boundary**
   - Snapshot and import payloads are checked before they reach a store.
"""

from .models import CorrectnessTag, ExamMetadata, ScoredStudent, ScoreResult, Student
from .schemas.validator import ValidationError

__all__ = [
    "CorrectnessTag",
    "ExamMetadata",
    "ScoredStudent",
    "ScoreResult",
    "Student",
    "ValidationError",
]
