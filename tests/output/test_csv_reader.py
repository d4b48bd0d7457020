"""
Unit Tests for the CSV import.
"""

import pytest

from grading_toolkit.core.models import ExamMetadata, SessionSnapshot, Student
from grading_toolkit.output.csv_reader import (
    ImportFormatError,
    ImportIOError,
    parse_results_csv,
    read_results_csv,
)
from grading_toolkit.output.csv_writer import render_results_csv


class TestParseResultsCsv:
    def test_parse_when_exported_then_restores_labels_key_and_students(self, sample_snapshot):
        payload = render_results_csv(
            sample_snapshot.metadata, sample_snapshot.answer_key, sample_snapshot.students
        )

        snapshot = parse_results_csv(payload)

        assert snapshot.metadata == sample_snapshot.metadata
        assert snapshot.answer_key == ("A", "B", "C")
        # Exported in projected order, so Ana now comes first
        assert snapshot.students == (
            Student("Ana", ("A", "C", "C")),
            Student("Bruno", ("A", "B", "D")),
        )

    def test_parse_when_text_without_bom_then_works(self):
        text = "Disciplina,Artes\nSerie,1º Ano\nGabarito,A,,c\n\nAlunos,1,2,3,MÉDIA\nAna,a,-,,33%\n"

        snapshot = parse_results_csv(text)

        assert snapshot.answer_key == ("A", "", "c")
        assert snapshot.students == (Student("Ana", ("a", "-", "")),)

    def test_parse_when_marker_rows_reordered_then_found(self):
        text = "Gabarito,B\nSerie,2º Ano\nDisciplina,Física\nAlunos,1,MÉDIA\nLia,B,100%"

        snapshot = parse_results_csv(text)

        assert snapshot.metadata == ExamMetadata("Física", "2º Ano")
        assert snapshot.answer_key == ("B",)

    def test_parse_when_student_row_short_then_padded(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A,B,C\nAlunos,1,2,3\nAna,A"
        assert parse_results_csv(text).students[0].answers == ("A", "", "")

    def test_parse_skips_rows_without_name_or_answers(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A\nAlunos,1,MÉDIA\nSolo\n,A,0%\nBia,A,100%"
        assert [s.name for s in parse_results_csv(text).students] == ["Bia"]

    def test_parse_ignores_columns_past_key_length(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A,B\nAlunos,1,2,MÉDIA\nAna,A,B,100%,extra"
        assert parse_results_csv(text).students[0].answers == ("A", "B")

    def test_parse_when_no_students_then_empty_roster(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A\n\nAlunos,1,MÉDIA"
        assert parse_results_csv(text).students == ()

    def test_parse_when_marker_missing_then_raises(self):
        text = "Disciplina,A\nGabarito,A\nAlunos,1"
        with pytest.raises(ImportFormatError, match="Serie"):
            parse_results_csv(text)

    def test_parse_when_marker_label_padded_then_not_recognized(self):
        text = " Disciplina,A\nSerie,B\nGabarito,A\nAlunos,1"
        with pytest.raises(ImportFormatError, match="Disciplina"):
            parse_results_csv(text)

    def test_parse_when_key_empty_then_raises(self):
        text = "Disciplina,A\nSerie,B\nGabarito\nAlunos"
        with pytest.raises(ImportFormatError):
            parse_results_csv(text)

    def test_parse_when_key_value_invalid_then_reports_position(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A,Z\nAlunos,1,2"
        with pytest.raises(ImportFormatError) as exc_info:
            parse_results_csv(text)
        assert (exc_info.value.row, exc_info.value.column) == (3, 3)

    def test_parse_when_answer_invalid_then_raises(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A\nAlunos,1\nAna,Q"
        with pytest.raises(ImportFormatError, match="Ana"):
            parse_results_csv(text)

    def test_parse_when_not_utf8_then_raises_format_error(self):
        with pytest.raises(ImportFormatError):
            parse_results_csv(b"\xff\xfe\xfa")

    def test_parse_returns_snapshot(self):
        text = "Disciplina,A\nSerie,B\nGabarito,A\nAlunos,1"
        assert isinstance(parse_results_csv(text), SessionSnapshot)


class TestReadResultsCsv:
    def test_read_when_file_missing_then_raises_io_error(self, tmp_path):
        with pytest.raises(ImportIOError):
            read_results_csv(tmp_path / "missing.csv")

    def test_read_when_file_exists_then_parses(self, tmp_path):
        path = tmp_path / "results.csv"
        path.write_bytes("\ufeffDisciplina,A\r\nSerie,B\r\nGabarito,E\r\n\r\nAlunos,1,MÉDIA\r\nAna,E,100%".encode("utf-8"))

        snapshot = read_results_csv(path)

        assert snapshot.answer_key == ("E",)
        assert snapshot.students[0].name == "Ana"
