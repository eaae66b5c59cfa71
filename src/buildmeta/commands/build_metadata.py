"""Build-metadata command: project.properties and build.properties for a project.

Writes project.properties to the configured destination, inspects the git
checkout containing the project, and writes build.properties next to it.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from .. import generator
from ..config import load_config
from ..constants import PROJECT_PROPERTIES
from ..errors import ArgumentError, ProjectInfoError
from ..metadata import KEY_BUILD_NAME
from ..output import get_output_context
from ..properties import read_properties, write_properties
from ..services import inspect_checkout, load_project_info

logger = logging.getLogger(__name__)


def _parse_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Parse KEY=VALUE options."""
    result: dict[str, str] = {}
    for assignment in assignments or []:
        key, sep, value = assignment.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got {assignment!r}", param_hint="--set")
        result[key.strip()] = value.strip()
    return result


def build_metadata(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-p",
        help="Project directory containing pyproject.toml",
    ),
    destination: str | None = typer.Option(
        None,
        "--destination",
        "-d",
        help=f"Path of {PROJECT_PROPERTIES}, relative to the project directory",
    ),
    skip: bool = typer.Option(
        False,
        "--skip",
        help="Skip writing metadata",
    ),
    echo: bool = typer.Option(
        False,
        "--echo",
        help="Print the written files",
    ),
    assignments: list[str] | None = typer.Option(
        None,
        "--set",
        "-s",
        help="Extra build property as KEY=VALUE (repeatable)",
    ),
) -> None:
    """Write project.properties and build.properties for a project."""
    ctx = get_output_context()
    project_dir = project_dir.resolve()
    overrides = _parse_assignments(assignments)

    try:
        config = load_config(project_dir)
    except (OSError, ValueError, ValidationError) as e:
        ctx.error(f"Invalid buildmeta configuration: {e}")
        raise typer.Exit(1) from None

    if skip or config.skip:
        logger.info("Build metadata is skipped")
        return

    try:
        project = load_project_info(project_dir, group_id=config.group_id, display_name=config.name)
    except ProjectInfoError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None
    if project is None:
        logger.info("Not writing project metadata for %s: no [project] table", project_dir)
        return

    project_file = project_dir / destination if destination else config.destination(project_dir)
    project_properties = project.to_properties()
    try:
        write_properties(project_file, project_properties)
    except OSError as e:
        ctx.error(f"Unable to write {project_file}: {e}")
        raise typer.Exit(1) from None

    facts = inspect_checkout(project_dir)
    if facts.checkout is None:
        logger.warning("Did not find a git checkout for %s", project_dir)

    args = facts.to_arguments()
    for key, value in {**config.properties, **overrides}.items():
        args += [key, value]

    try:
        build_file = generator.generate(project_file.parent, *args)
    except ArgumentError as e:
        ctx.error(str(e))
        raise typer.Exit(2) from None
    except OSError as e:
        ctx.error(f"Failed generating metadata: {e}")
        raise typer.Exit(1) from None
    if build_file is None:
        raise typer.Exit(1)

    build_properties = read_properties(build_file)
    if ctx.json_mode:
        ctx.print_json(
            {
                "project_properties": str(project_file),
                "build_properties": str(build_file),
                "project": project_properties,
                "build": build_properties,
            }
        )
        return

    if echo or config.verbose:
        ctx.print(f"Wrote {project_file}")
        ctx.properties(PROJECT_PROPERTIES, project_properties)
        ctx.print(f"Wrote {build_file}")
        ctx.properties(build_file.name, build_properties)
    else:
        ctx.success(f"Wrote {build_file.name} ({build_properties.get(KEY_BUILD_NAME)})")
