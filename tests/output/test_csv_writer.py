"""
Unit Tests for the CSV export.
"""

from grading_toolkit.core.models import ExamMetadata, Student
from grading_toolkit.output.csv_writer import (
    render_results_csv,
    results_csv_rows,
    write_results_csv,
)


EXPECTED_SAMPLE = (
    "\ufeffDisciplina,Matemática\r\n"
    "Serie,5º Ano B\r\n"
    "Gabarito,A,B,C\r\n"
    "\r\n"
    "Alunos,1,2,3,MÉDIA\r\n"
    "Ana,A,C,C,67%\r\n"
    "Bruno,A,B,D,67%"
)


class TestRenderResultsCsv:
    def test_render_when_sample_session_then_exact_bytes(self, sample_snapshot):
        payload = render_results_csv(
            sample_snapshot.metadata, sample_snapshot.answer_key, sample_snapshot.students
        )
        assert payload == EXPECTED_SAMPLE.encode("utf-8")

    def test_render_starts_with_bom(self, sample_snapshot):
        payload = render_results_csv(
            sample_snapshot.metadata, sample_snapshot.answer_key, sample_snapshot.students
        )
        assert payload.startswith(b"\xef\xbb\xbf")
        assert not payload.endswith(b"\r\n")

    def test_render_keeps_empty_answers_empty_and_literal_case(self):
        payload = render_results_csv(
            ExamMetadata("Artes", "1º Ano"), ("A", "B"), [Student("Ana", ("a", ""))]
        )
        assert payload.decode("utf-8-sig").splitlines()[-1] == "Ana,a,,50%"

    def test_render_quotes_names_with_commas(self):
        payload = render_results_csv(
            ExamMetadata("Artes", "1º Ano"), ("A",), [Student("Silva, Ana", ("A",))]
        )
        assert payload.decode("utf-8-sig").splitlines()[-1] == '"Silva, Ana",A,100%'


class TestResultsCsvRows:
    def test_rows_when_no_students_then_header_is_last(self):
        rows = results_csv_rows(ExamMetadata("Artes", "1º Ano"), ("", "C"), [])

        assert rows[2] == ["Gabarito", "", "C"]
        assert rows[3] == []
        assert rows[-1] == ["Alunos", "1", "2", "MÉDIA"]


class TestWriteResultsCsv:
    def test_write_creates_parent_dirs(self, tmp_path, sample_snapshot):
        path = tmp_path / "out" / "resultados_provas.csv"

        write_results_csv(
            path, sample_snapshot.metadata, sample_snapshot.answer_key, sample_snapshot.students
        )

        assert path.read_bytes() == EXPECTED_SAMPLE.encode("utf-8")
