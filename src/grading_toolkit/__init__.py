"""Top-level package for the multiple-choice grading toolkit.

Provides subpackages:
- grading_toolkit.core – data models, validation and snapshot serialization
- grading_toolkit.session – answer key / roster stores and snapshot persistence
- grading_toolkit.scoring – scoring engine and results projection
- grading_toolkit.output – results table, CSV import/export and PDF export
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("grading-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
