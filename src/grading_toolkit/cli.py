"""
Command-line front end for the grading toolkit.

Every command locks the persisted session snapshot, loads it, applies one
operation and saves it back before releasing the lock. A command that fails
(including a failed save) prints an error and exits with status 1.

Examples:
    grading-toolkit meta --subject "Matemática" --grade "5º Ano B"
    grading-toolkit key length 10
    grading-toolkit key set 1 A
    grading-toolkit student add "Ana" "A,C,-,,E"
    grading-toolkit show
    grading-toolkit export --out results/ --format pdf
    grading-toolkit import resultados_provas.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from grading_toolkit import __version__
from grading_toolkit.controller import ExportError, export_results, import_results
from grading_toolkit.core.schemas.validator import ValidationError
from grading_toolkit.output import CsvImportError, build_results_table, render_text_table
from grading_toolkit.session import AnswerSheetDraft, ExamSession, SnapshotSaveError, SnapshotStore
from grading_toolkit.utils.paths import get_exports_dir, get_snapshot_path

logger = logging.getLogger("grading_toolkit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grading-toolkit",
        description="Grade multiple-choice exams against an answer key and export the results.",
    )
    parser.add_argument("--snapshot", type=Path, default=None,
                        help="Session snapshot file (default: application data directory)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    meta = commands.add_parser("meta", help="Show or set subject and grade/class")
    meta.add_argument("--subject", help="Subject name (Disciplina)")
    meta.add_argument("--grade", help="Grade or class (Serie)")

    key = commands.add_parser("key", help="Edit the answer key")
    key_commands = key.add_subparsers(dest="key_command", required=True)
    key_length = key_commands.add_parser("length", help="Set the number of questions")
    key_length.add_argument("count", type=int)
    key_set = key_commands.add_parser("set", help="Toggle the answer of one question")
    key_set.add_argument("question", type=int, help="Question number (1-based)")
    key_set.add_argument("letter", help="A, B, C, D or E (same letter again clears it)")

    student = commands.add_parser("student", help="Manage the roster")
    student_commands = student.add_subparsers(dest="student_command", required=True)
    add = student_commands.add_parser("add", help="Register a student")
    add.add_argument("name")
    add.add_argument("answers", nargs="?", default="",
                     help="Comma-separated answers, e.g. 'A,C,-,,E' ('-' = no answer)")
    edit = student_commands.add_parser("edit", help="Edit a registered student")
    edit.add_argument("index", type=int, help="Student number as listed by 'student list'")
    edit.add_argument("--name")
    edit.add_argument("--answers", help="Comma-separated answers replacing the current ones")
    remove = student_commands.add_parser("remove", help="Remove a student")
    remove.add_argument("index", type=int)
    student_commands.add_parser("list", help="List registered students")
    student_commands.add_parser("clear", help="Remove every student")

    commands.add_parser("show", help="Print the results table")

    export = commands.add_parser("export", help="Export results as CSV and/or PDF")
    export.add_argument("--out", type=Path, default=None, help="Output directory")
    export.add_argument("--format", dest="formats", action="append", choices=("csv", "pdf"),
                        help="Format to export (repeatable, default: both)")

    import_ = commands.add_parser("import", help="Load a results CSV into the session")
    import_.add_argument("file", type=Path)

    commands.add_parser("reset", help="Clear key, roster and labels")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    store = SnapshotStore(args.snapshot or get_snapshot_path())

    try:
        with store.session() as session:
            return _dispatch(args, session)
    except (
        ValidationError, CsvImportError, ExportError, SnapshotSaveError, ValueError, IndexError,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _dispatch(args: argparse.Namespace, session: ExamSession) -> int:
    if args.command == "meta":
        if args.subject is not None or args.grade is not None:
            session.set_metadata(subject=args.subject, grade=args.grade)
        print(f"Disciplina: {session.metadata.subject}")
        print(f"Serie: {session.metadata.grade}")
    elif args.command == "key":
        _run_key(args, session)
    elif args.command == "student":
        _run_student(args, session)
    elif args.command == "show":
        if len(session.roster) == 0:
            print("No students registered yet.")
        else:
            table = build_results_table(session.metadata, session.answer_key.slots, session.roster)
            print(render_text_table(table))
    elif args.command == "export":
        result = export_results(
            session,
            args.out or get_exports_dir(),
            formats=tuple(args.formats or ("csv", "pdf")),
        )
        for path in (result.csv_path, result.pdf_path):
            if path is not None:
                print(path)
    elif args.command == "import":
        import_results(session, args.file)
        print(
            f"Imported {session.answer_key.length} questions and "
            f"{len(session.roster)} students."
        )
    elif args.command == "reset":
        session.reset()
        print("Session reset.")
    return 0


def _run_key(args: argparse.Namespace, session: ExamSession) -> None:
    if args.key_command == "length":
        session.answer_key.set_length(args.count)
    else:
        value = session.answer_key.set_slot(args.question - 1, args.letter.upper())
        print(f"{args.question}: {value or '(blank)'}")
    if session.roster:
        logger.warning(f"Changing the answer key affects the scores of {len(session.roster)} student(s).")
    print("Gabarito: " + " ".join(f"{i + 1}:{v or '-'}" for i, v in enumerate(session.answer_key.slots)))


def _run_student(args: argparse.Namespace, session: ExamSession) -> None:
    command = args.student_command
    if command == "list":
        for number, student in enumerate(session.roster, start=1):
            print(f"{number}. {student.name}")
        return
    if command == "clear":
        session.roster.clear()
        return
    if command == "remove":
        removed = session.roster.remove(args.index - 1)
        if removed is None:
            raise IndexError(f"No student number {args.index}")
        print(f"Removed {removed.name!r}.")
        return

    session.require_metadata()
    draft = AnswerSheetDraft(session.answer_key.length)
    if command == "edit":
        if not 1 <= args.index <= len(session.roster):
            raise IndexError(f"No student number {args.index}")
        draft.begin_edit(args.index - 1, session.roster[args.index - 1])
        if args.name is not None:
            draft.name = args.name
        if args.answers is not None:
            _fill_answers(draft, args.answers)
    else:
        draft.name = args.name
        _fill_answers(draft, args.answers)
    student = draft.commit(session)
    print(f"Saved {student.name!r}.")


def _fill_answers(draft: AnswerSheetDraft, text: str) -> None:
    """Load comma-separated answers into the draft ('' leaves a blank)."""
    values = [v.strip().upper() for v in text.split(",")] if text else []
    if len(values) > len(draft.answers):
        raise ValueError(f"Got {len(values)} answers for {len(draft.answers)} questions")
    draft.answers = [""] * len(draft.answers)
    for index, value in enumerate(values):
        if value:
            draft.toggle(index, value)


if __name__ == "__main__":
    raise SystemExit(main())
