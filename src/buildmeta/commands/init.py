"""Init command implementation."""

from pathlib import Path

import typer

from ..config import write_config_template
from ..constants import CONFIG_FILE
from ..output import get_output_context


def init(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-p",
        help="Project directory",
    ),
) -> None:
    """Create a buildmeta.toml config template."""
    ctx = get_output_context()

    if not project_dir.is_dir():
        ctx.error(f"Not a directory: {project_dir}")
        raise typer.Exit(1)

    config_path = project_dir / CONFIG_FILE
    if config_path.exists():
        ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        return

    write_config_template(project_dir)
    ctx.success(f"Created config template: {config_path}", data={"path": str(config_path)})
