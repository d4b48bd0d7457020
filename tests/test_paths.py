"""
Tests for application data paths.
"""

from grading_toolkit.utils.paths import HOME_ENV_VAR, get_app_data_dir, get_exports_dir, get_snapshot_path


def test_app_data_dir_when_env_override_then_used(monkeypatch, tmp_path):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))

    assert get_app_data_dir() == tmp_path
    assert get_snapshot_path() == tmp_path / "session.json"
    assert get_exports_dir() == tmp_path / "exports"


def test_app_data_dir_when_linux_then_uses_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv(HOME_ENV_VAR, raising=False)
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert get_app_data_dir() == tmp_path / "Grading Toolkit"
