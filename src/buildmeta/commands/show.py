"""Show command: describe a generated build.properties file."""

from pathlib import Path

import typer
from rich.markup import escape

from ..metadata import KEY_BUILD_DATE, KEY_BUILD_NAME, KEY_BUILD_NUMBER, BuildMetadata
from ..output import get_output_context
from ..properties import read_properties


def show(
    file: Path = typer.Argument(..., help="build.properties file to describe"),
) -> None:
    """Show the build recorded in a build.properties file."""
    ctx = get_output_context()

    if not file.is_file():
        ctx.error(f"File not found: {file}")
        raise typer.Exit(1)

    properties = read_properties(file)
    meta = BuildMetadata.from_properties(properties)
    timestamp = meta.git_commit_timestamp()
    summary = {
        "build-name": properties.get(KEY_BUILD_NAME),
        "build-number": properties.get(KEY_BUILD_NUMBER),
        "build-date": properties.get(KEY_BUILD_DATE),
        "commit": meta.git_commit_hash(),
        "short-commit": meta.short_git_commit_hash(),
        "commit-timestamp": timestamp.isoformat() if timestamp else None,
        "clean": meta.is_clean_repository(),
    }

    if ctx.json_mode:
        ctx.print_json(summary)
        return

    ctx.print(f"[bold]Build:[/bold] {escape(str(summary['build-name']))}")
    ctx.print(f"[bold]Number:[/bold] {summary['build-number']}")
    ctx.print(f"[bold]Date:[/bold] {summary['build-date']}")
    if summary["commit"]:
        ctx.print(f"[bold]Commit:[/bold] {summary['short-commit']} ({summary['commit']})")
    if summary["commit-timestamp"]:
        ctx.print(f"[bold]Committed:[/bold] {summary['commit-timestamp']}")
    if meta.is_clean_repository():
        ctx.print("[green]Built from a clean checkout[/green]")
    else:
        ctx.print("[yellow]Built from a checkout with local modifications[/yellow]")
