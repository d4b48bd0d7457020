"""
Module: session.locking

Purpose:
    Cross-process locking for the session snapshot. Every CLI command is a
    separate process that loads and saves the same snapshot, so reads take
    a shared lock and writes an exclusive one.

    The lock is held on a sibling `<name>.lock` file because the snapshot
    itself is replaced atomically on save (a lock on the old file would not
    cover the new one).

Key Functions:
    - lock_path_for: Lock file that guards a snapshot path
    - locked_path: Context manager holding the lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - session.store: SnapshotStore.load / save
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import portalocker


def lock_path_for(path: Path) -> Path:
    return path.with_name(path.name + ".lock")


@contextmanager
def locked_path(
    path: Path,
    lock_type: int = portalocker.LOCK_EX,
) -> Generator[None, None, None]:
    """
    Hold a lock guarding `path` for the duration of the block.

    Args:
        path: File being guarded (need not exist yet)
        lock_type: LOCK_EX for writers, LOCK_SH for readers

    Raises:
        OSError: If the lock file cannot be created

    Example:
        >>> with locked_path(snapshot_path):
        ...     save_snapshot_json(snapshot, snapshot_path)
    """
    lock_path = lock_path_for(path)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    with open(lock_path, "a", encoding="utf-8") as f:
        portalocker.lock(f, lock_type)
        try:
            yield
        finally:
            portalocker.unlock(f)
