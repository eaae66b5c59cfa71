"""Generate command: write build.properties from explicit key/value pairs."""

from pathlib import Path

import typer

from .. import generator
from ..errors import ArgumentError
from ..output import get_output_context
from ..properties import read_properties


def generate(
    output_dir: Path | None = typer.Argument(
        None,
        help="Directory to write build.properties into",
    ),
    pairs: list[str] | None = typer.Argument(
        None,
        help="Additional properties as KEY VALUE pairs",
    ),
) -> None:
    """Write build.properties with build number, date and name."""
    ctx = get_output_context()

    if output_dir is None:
        typer.echo(generator.USAGE, err=True)
        return

    try:
        path = generator.generate(output_dir, *(pairs or []))
    except ArgumentError as e:
        ctx.error(str(e))
        raise typer.Exit(2) from None
    except OSError as e:
        ctx.error(f"Unable to write metadata to {output_dir}: {e}")
        raise typer.Exit(1) from None

    if path is None:
        return
    ctx.success(f"Wrote {path}", data={"path": str(path), "properties": read_properties(path)})
