"""Utility helpers for the core package."""

from .serialization import (
    deserialize_snapshot,
    load_snapshot_json,
    save_snapshot_json,
    serialize_snapshot,
)

__all__ = [
    "deserialize_snapshot",
    "load_snapshot_json",
    "save_snapshot_json",
    "serialize_snapshot",
]
