import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import grading_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from grading_toolkit.core.models import ExamMetadata, SessionSnapshot, Student  # noqa: E402
from grading_toolkit.session import ExamSession, SnapshotStore  # noqa: E402


# Common test fixtures
@pytest.fixture
def sample_metadata() -> ExamMetadata:
    return ExamMetadata(subject="Matemática", grade="5º Ano B")


@pytest.fixture
def sample_snapshot(sample_metadata) -> SessionSnapshot:
    """Three-question exam: Bruno registered before Ana."""
    return SessionSnapshot(
        metadata=sample_metadata,
        answer_key=("A", "B", "C"),
        students=(
            Student("Bruno", ("A", "B", "D")),
            Student("Ana", ("A", "C", "C")),
        ),
    )


@pytest.fixture
def sample_session(sample_snapshot) -> ExamSession:
    return ExamSession(sample_snapshot)


@pytest.fixture
def snapshot_store(tmp_path: Path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "session.json")
