"""Project identity from pyproject.toml."""

import importlib.metadata
import re
import tomllib
from pathlib import Path

from ..errors import ProjectInfoError
from ..models import ProjectInfo

UNKNOWN_VERSION = "0+unknown"


def canonical_name(name: str) -> str:
    """Normalize a distribution name (PEP 503)."""
    return re.sub(r"[-_.]+", "-", name).lower()


def _installed_version(name: str) -> str | None:
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return None


def load_project_info(
    project_dir: Path,
    group_id: str = "",
    display_name: str | None = None,
) -> ProjectInfo | None:
    """Read project identity from the [project] table of pyproject.toml.

    Args:
        project_dir: Directory containing pyproject.toml
        group_id: Organization or namespace to record
        display_name: Name to record instead of the distribution name

    Returns:
        ProjectInfo, or None if the directory has no pyproject.toml or it has
        no [project] table

    Raises:
        ProjectInfoError: If pyproject.toml is unreadable or has no name
    """
    pyproject = project_dir / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ProjectInfoError(f"Cannot read {pyproject}: {e}") from e

    project = data.get("project")
    if not isinstance(project, dict):
        return None
    name = project.get("name")
    if not name:
        raise ProjectInfoError(f"{pyproject} has no project name")

    # Dynamic versions are only known once the project is installed
    version = project.get("version") or _installed_version(name) or UNKNOWN_VERSION
    return ProjectInfo(
        name=display_name or name,
        version=str(version),
        group_id=group_id,
        artifact_id=canonical_name(name),
    )
