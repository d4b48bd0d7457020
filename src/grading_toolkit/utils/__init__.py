"""Filesystem helpers."""

from .paths import get_app_data_dir, get_exports_dir, get_snapshot_path

__all__ = ["get_app_data_dir", "get_exports_dir", "get_snapshot_path"]
