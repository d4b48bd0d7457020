"""
Unit Tests for the core data models.
"""

import pytest

from grading_toolkit.core.models import (
    CorrectnessTag,
    ExamMetadata,
    ScoreResult,
    SessionSnapshot,
    Student,
    is_answer_value,
    is_key_value,
)


class TestExamMetadata:
    """Tests for ExamMetadata labels and title."""

    def test_title_when_both_labels_set_then_joins_them(self):
        assert ExamMetadata("História", "9º Ano").title == "História - 9º Ano"

    @pytest.mark.parametrize("subject,grade", [("", "9º Ano"), ("História", ""), ("  ", " ")])
    def test_title_when_a_label_is_blank_then_uses_fallback(self, subject, grade):
        assert ExamMetadata(subject, grade).title == "Resultados da Prova"

    def test_is_complete_when_blank_then_false(self):
        assert not ExamMetadata("Ciências", "   ").is_complete
        assert ExamMetadata("Ciências", "6º Ano").is_complete


class TestStudent:
    """Tests for Student records."""

    def test_init_when_list_given_then_stores_tuple(self):
        student = Student("Ana", ["A", "B"])
        assert student.answers == ("A", "B")

    def test_resized_when_growing_then_pads_with_empty(self):
        assert Student("Ana", ("A",)).resized(3).answers == ("A", "", "")

    def test_resized_when_shrinking_then_truncates_from_end(self):
        assert Student("Ana", ("A", "B", "C")).resized(1).answers == ("A",)

    def test_resized_when_same_length_then_returns_same_instance(self):
        student = Student("Ana", ("A",))
        assert student.resized(1) is student

    def test_blank_creates_empty_answers(self):
        assert Student.blank("Ana", 2).answers == ("", "")

    def test_is_frozen(self):
        student = Student("Ana", ("A",))
        with pytest.raises(AttributeError):
            student.name = "Bia"  # type: ignore[misc]

    def test_dict_roundtrip_keeps_literal_case(self):
        student = Student("Ana", ("a", "-", ""))
        assert Student.from_dict(student.to_dict()) == student


class TestAnswerAlphabet:
    """Tests for allowed key/answer values."""

    @pytest.mark.parametrize("value", ["A", "e", ""])
    def test_is_key_value_accepts_letters_and_empty(self, value):
        assert is_key_value(value)

    @pytest.mark.parametrize("value", ["F", "-", "AB", " "])
    def test_is_key_value_rejects_others(self, value):
        assert not is_key_value(value)

    def test_is_answer_value_accepts_unanswered_mark(self):
        assert is_answer_value("-")
        assert not is_answer_value("X")


class TestScoreResult:
    def test_init_when_percentage_out_of_range_then_raises(self):
        with pytest.raises(ValueError):
            ScoreResult(percentage=101, correct_count=0, per_question=())

    def test_tag_values_are_strings(self):
        assert CorrectnessTag.CORRECT == "correct"


class TestSessionSnapshot:
    def test_default_has_22_blank_questions_and_no_students(self):
        snapshot = SessionSnapshot.default()
        assert snapshot.question_count == 22
        assert set(snapshot.answer_key) == {""}
        assert snapshot.students == ()
        assert snapshot.metadata == ExamMetadata()
