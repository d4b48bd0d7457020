"""
Unit Tests for validation utilities.
"""

import pytest

from grading_toolkit.core.models import ExamMetadata
from grading_toolkit.core.schemas.validator import (
    ValidationError,
    validate_metadata,
    validate_snapshot,
    validate_student_name,
)


@pytest.fixture
def valid_snapshot() -> dict:
    return {
        "version": 1,
        "question_count": 2,
        "answer_key": ["A", ""],
        "students": [{"name": "Ana", "answers": ["a", "-"]}],
        "subject": "Matemática",
        "grade": "5º Ano",
    }


class TestValidateMetadata:
    def test_validate_when_complete_then_passes(self):
        validate_metadata(ExamMetadata("Matemática", "5º Ano"))

    def test_validate_when_grade_missing_then_raises_with_path(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_metadata(ExamMetadata("Matemática", " "))
        assert exc_info.value.path == "grade"
        assert exc_info.value.errors == ["Missing field: grade"]

    def test_validate_when_both_missing_then_lists_both(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_metadata(ExamMetadata())
        assert len(exc_info.value.errors) == 2


class TestValidateStudentName:
    def test_blank_name_raises(self):
        with pytest.raises(ValidationError):
            validate_student_name("   ")


class TestValidateSnapshot:
    def test_validate_when_valid_then_passes(self, valid_snapshot):
        validate_snapshot(valid_snapshot)

    def test_validate_when_not_a_dict_then_raises(self):
        with pytest.raises(ValidationError):
            validate_snapshot(["not", "a", "dict"])

    def test_validate_when_field_missing_then_raises(self, valid_snapshot):
        del valid_snapshot["students"]
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_snapshot(valid_snapshot)

    def test_validate_when_version_unknown_then_raises(self, valid_snapshot):
        valid_snapshot["version"] = 99
        with pytest.raises(ValidationError) as exc_info:
            validate_snapshot(valid_snapshot)
        assert exc_info.value.path == "version"

    @pytest.mark.parametrize("count", [0, -1, "2", True])
    def test_validate_when_question_count_invalid_then_raises(self, valid_snapshot, count):
        valid_snapshot["question_count"] = count
        with pytest.raises(ValidationError):
            validate_snapshot(valid_snapshot)

    def test_validate_when_key_length_mismatch_then_raises(self, valid_snapshot):
        valid_snapshot["answer_key"] = ["A"]
        with pytest.raises(ValidationError) as exc_info:
            validate_snapshot(valid_snapshot)
        assert exc_info.value.path == "answer_key"

    def test_validate_when_student_answers_mismatch_then_raises(self, valid_snapshot):
        valid_snapshot["students"][0]["answers"] = ["A", "B", "C"]
        with pytest.raises(ValidationError) as exc_info:
            validate_snapshot(valid_snapshot)
        assert exc_info.value.path == "students[0].answers"

    def test_validate_when_key_contains_marker_then_raises(self, valid_snapshot):
        valid_snapshot["answer_key"] = ["-", "A"]
        with pytest.raises(ValidationError) as exc_info:
            validate_snapshot(valid_snapshot)
        assert exc_info.value.path == "answer_key[0]"

    def test_validate_when_student_name_blank_then_raises(self, valid_snapshot):
        valid_snapshot["students"][0]["name"] = ""
        with pytest.raises(ValidationError):
            validate_snapshot(valid_snapshot)
