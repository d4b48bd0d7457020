"""
Path utilities for the session snapshot and default export directory.

Override: GRADING_TOOLKIT_HOME environment variable
Default:  platform application-data directory
"""
from __future__ import annotations

import os
import platform
from pathlib import Path

APP_NAME = "Grading Toolkit"
HOME_ENV_VAR = "GRADING_TOOLKIT_HOME"


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Windows: %LOCALAPPDATA%/Grading Toolkit
    macOS:   ~/Library/Application Support/Grading Toolkit
    Linux:   $XDG_DATA_HOME/Grading Toolkit (~/.local/share by default)
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    system = platform.system()
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA", os.environ.get("APPDATA"))
        return Path(base) / APP_NAME if base else Path.home() / ".grading_toolkit"
    if system == "Darwin":
        return Path.home() / "Library/Application Support" / APP_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    base_dir = Path(xdg) if xdg else Path.home() / ".local/share"
    return base_dir / APP_NAME


def get_snapshot_path() -> Path:
    """Get the path of the persisted session snapshot."""
    return get_app_data_dir() / "session.json"


def get_exports_dir() -> Path:
    """Default directory for CSV/PDF exports."""
    return get_app_data_dir() / "exports"
