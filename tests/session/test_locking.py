"""
Unit Tests for snapshot locking.
"""

import portalocker

from grading_toolkit.session.locking import lock_path_for, locked_path


class TestLockedPath:
    def test_lock_path_is_sibling_file(self, tmp_path):
        assert lock_path_for(tmp_path / "session.json") == tmp_path / "session.json.lock"

    def test_locked_path_creates_lock_file_and_parents(self, tmp_path):
        path = tmp_path / "nested" / "session.json"

        with locked_path(path):
            assert lock_path_for(path).exists()

        assert not path.exists()

    def test_locked_path_releases_on_exit(self, tmp_path):
        path = tmp_path / "session.json"

        with locked_path(path):
            pass

        with open(lock_path_for(path), "a", encoding="utf-8") as other:
            portalocker.lock(other, portalocker.LOCK_EX | portalocker.LOCK_NB)
            portalocker.unlock(other)


class TestSnapshotStoreLocking:
    def test_save_creates_lock_file_and_clear_removes_it(self, snapshot_store, sample_snapshot):
        snapshot_store.save(sample_snapshot)
        assert lock_path_for(snapshot_store.path).exists()

        snapshot_store.clear()

        assert not lock_path_for(snapshot_store.path).exists()
