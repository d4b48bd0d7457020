"""
Snapshot persistence for the grading session.

The session is stored as a single JSON record. Any missing or malformed
snapshot loads as defaults, never an exception. A failed write raises
SnapshotSaveError so callers never report a change that was not kept.

Concurrency:
    `session()` holds an exclusive lock (see session.locking) across the
    whole load -> mutate -> save cycle, so concurrent CLI invocations are
    serialized and never overwrite each other's changes. Plain `load()`
    and `save()` lock only for the read or the write itself.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import portalocker

from grading_toolkit.core.models import SessionSnapshot
from grading_toolkit.core.schemas.validator import ValidationError
from grading_toolkit.core.utils.serialization import load_snapshot_json, save_snapshot_json

from .locking import lock_path_for, locked_path
from .state import ExamSession

logger = logging.getLogger(__name__)


class SnapshotSaveError(Exception):
    """Raised when the snapshot cannot be written (or its lock taken)."""
    pass


class SnapshotStore:
    """Lightweight JSON-backed store for the session snapshot."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.last_load_error: str | None = None

    def load(self) -> SessionSnapshot:
        """
        Load the stored snapshot under a shared lock.

        Returns:
            The stored snapshot, or defaults (22 blank questions, empty
            roster, empty labels) if the file is absent or corrupt.
        """
        if not self.path.exists():
            return self._read()
        try:
            with locked_path(self.path, portalocker.LOCK_SH):
                return self._read()
        except OSError as e:
            self.last_load_error = f"Failed to lock snapshot: {e}"
            logger.warning(f"{self.last_load_error}. Falling back to defaults.")
            return SessionSnapshot.default()

    def save(self, snapshot: SessionSnapshot) -> None:
        """
        Write the snapshot with atomic replacement, under an exclusive lock.

        Raises:
            SnapshotSaveError: If the lock or the file cannot be written
        """
        try:
            with locked_path(self.path):
                self._write(snapshot)
        except OSError as e:
            raise SnapshotSaveError(f"Failed to save snapshot to {self.path}: {e}") from e

    @contextmanager
    def session(self) -> Iterator[ExamSession]:
        """
        Locked read-modify-write of the stored session.

        Holds an exclusive lock for the whole block. The snapshot is written
        back on a clean exit when the session changed; if the block raises,
        nothing is written.

        Raises:
            SnapshotSaveError: If the lock cannot be taken or the write fails

        Example:
            >>> with store.session() as session:
            ...     session.roster.add("Ana", ["A", "", "-"])
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            lock_path_for(self.path).touch(exist_ok=True)
        except OSError as e:
            raise SnapshotSaveError(f"Cannot lock snapshot at {self.path}: {e}") from e

        with locked_path(self.path):
            loaded = self._read()
            session = ExamSession(loaded)
            yield session
            snapshot = session.snapshot()
            if snapshot != loaded:
                self._write(snapshot)

    def clear(self) -> None:
        """Delete the stored snapshot and its lock file, if any."""
        for path in (self.path, lock_path_for(self.path)):
            try:
                path.unlink()
            except FileNotFoundError:
                pass

    # ─────────────────────────────────────────────────────────────────────────
    # Unlocked I/O (callers hold the lock)
    # ─────────────────────────────────────────────────────────────────────────

    def _read(self) -> SessionSnapshot:
        self.last_load_error = None
        if not self.path.exists():
            logger.debug(f"No snapshot at {self.path}, starting from defaults")
            return SessionSnapshot.default()

        try:
            snapshot = load_snapshot_json(self.path)
        except json.JSONDecodeError as e:
            self.last_load_error = f"Snapshot file is corrupted: {e}"
        except ValidationError as e:
            self.last_load_error = f"Snapshot has an invalid shape at {e.path or '<root>'}: {e}"
        except (OSError, UnicodeDecodeError) as e:
            self.last_load_error = f"Failed to read snapshot: {e}"
        else:
            logger.debug(
                f"Loaded snapshot: {snapshot.question_count} questions, "
                f"{len(snapshot.students)} students"
            )
            return snapshot

        logger.warning(f"{self.last_load_error}. Falling back to defaults.")
        return SessionSnapshot.default()

    def _write(self, snapshot: SessionSnapshot) -> None:
        try:
            save_snapshot_json(snapshot, self.path)
        except OSError as e:
            raise SnapshotSaveError(f"Failed to save snapshot to {self.path}: {e}") from e
        logger.debug(f"Saved snapshot to {self.path}")
