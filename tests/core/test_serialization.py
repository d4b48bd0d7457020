"""
Unit Tests for snapshot serialization.
"""

import json

import pytest

from grading_toolkit.core.schemas.validator import ValidationError
from grading_toolkit.core.utils.serialization import (
    deserialize_snapshot,
    load_snapshot_json,
    save_snapshot_json,
    serialize_snapshot,
)


class TestSnapshotSerialization:
    def test_serialize_when_snapshot_given_then_returns_expected_fields(self, sample_snapshot):
        data = serialize_snapshot(sample_snapshot)

        assert data["version"] == 1
        assert data["question_count"] == 3
        assert data["answer_key"] == ["A", "B", "C"]
        assert data["students"][0] == {"name": "Bruno", "answers": ["A", "B", "D"]}
        assert data["subject"] == "Matemática"
        assert data["grade"] == "5º Ano B"

    def test_deserialize_when_serialized_then_matches_original(self, sample_snapshot):
        assert deserialize_snapshot(serialize_snapshot(sample_snapshot)) == sample_snapshot

    def test_deserialize_when_invalid_then_raises(self, sample_snapshot):
        data = serialize_snapshot(sample_snapshot)
        data["question_count"] = 4
        with pytest.raises(ValidationError):
            deserialize_snapshot(data)


class TestSnapshotFiles:
    def test_save_then_load_returns_same_snapshot(self, tmp_path, sample_snapshot):
        path = tmp_path / "nested" / "session.json"
        save_snapshot_json(sample_snapshot, path)

        assert load_snapshot_json(path) == sample_snapshot

    def test_save_leaves_no_temp_file(self, tmp_path, sample_snapshot):
        path = tmp_path / "session.json"
        save_snapshot_json(sample_snapshot, path)

        assert not path.with_suffix(".tmp").exists()

    def test_save_keeps_non_ascii_readable(self, tmp_path, sample_snapshot):
        path = tmp_path / "session.json"
        save_snapshot_json(sample_snapshot, path)

        assert "Matemática" in path.read_text(encoding="utf-8")

    def test_load_when_not_json_then_raises_decode_error(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_snapshot_json(path)
