"""
Project metadata used to label log records (service name and version).

The installed distribution wins; a source checkout falls back to the
[project] table of the nearest pyproject.toml.
"""

from functools import lru_cache
from importlib import metadata
from pathlib import Path
import tomllib

UNKNOWN_VERSION = "unknown"


def locate_pyproject(start: Path | None = None, levels: int = 5) -> Path | None:
    """
    Walk up from `start` (default: this module) looking for pyproject.toml,
    checking at most `levels` directories.
    """
    here = Path(start or __file__).resolve()
    if here.is_file():
        here = here.parent

    for folder in [here, *here.parents][:levels]:
        candidate = folder / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache()
def read_project_table(start: Path | None = None) -> dict:
    """The [project] table, or {} when there is no readable pyproject.toml."""
    path = locate_pyproject(start)
    if path is None:
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_project_name(default: str | None = None, start: Path | None = None) -> str | None:
    return read_project_table(start).get("name", default)


def get_project_version(default: str = UNKNOWN_VERSION, start: Path | None = None) -> str:
    name = get_project_name(start=start)
    if name:
        try:
            return metadata.version(name)
        except metadata.PackageNotFoundError:
            pass
    return read_project_table(start).get("version", default)


__all__ = [
    "locate_pyproject",
    "read_project_table",
    "get_project_name",
    "get_project_version",
]
