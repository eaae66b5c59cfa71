"""Configuration management for buildmeta."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field

from .constants import CONFIG_FILE


class BuildmetaConfig(BaseModel):
    """Root configuration for buildmeta.

    Read from buildmeta.toml, or from the [tool.buildmeta] table of
    pyproject.toml when there is no buildmeta.toml.
    """

    project_properties_destination: str = Field(
        default="build/metadata/project.properties",
        description="Where project.properties is written, relative to the project",
    )
    skip: bool = Field(default=False, description="Skip writing metadata")
    verbose: bool = Field(default=False, description="Echo written files")
    verb: str | None = Field(default=None, description="Verb for the build banner")
    name: str | None = Field(default=None, description="Display name for the project")
    group_id: str = Field(default="", description="Organization or namespace of the project")
    properties: dict[str, str] = Field(
        default_factory=dict, description="Extra entries for build.properties"
    )

    def destination(self, project_dir: Path) -> Path:
        """Resolve the project.properties destination against the project directory."""
        return project_dir / self.project_properties_destination


def load_config(project_dir: Path) -> BuildmetaConfig:
    """Load config from buildmeta.toml or pyproject.toml.

    Args:
        project_dir: Project directory

    Returns:
        Loaded configuration, or defaults if neither file configures buildmeta
    """
    config_path = project_dir / CONFIG_FILE
    if config_path.exists():
        with open(config_path, "rb") as f:
            return BuildmetaConfig.model_validate(tomllib.load(f))

    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
        section = data.get("tool", {}).get("buildmeta")
        if section is not None:
            return BuildmetaConfig.model_validate(section)
    return BuildmetaConfig()


def write_config_template(project_dir: Path) -> Path:
    """Write default buildmeta.toml template.

    Args:
        project_dir: Project directory

    Returns:
        Path to the written config file
    """
    config_path = project_dir / CONFIG_FILE
    template = {
        "project_properties_destination": "build/metadata/project.properties",
        "skip": False,
        "verbose": False,
        "verb": "Building",
        "group_id": "",
        # Extra entries written to build.properties as-is
        "properties": {},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
