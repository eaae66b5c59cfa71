"""Project-information command: announce what is being built."""

import threading
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.markup import escape

from ..config import load_config
from ..errors import ProjectInfoError
from ..output import get_output_context
from ..services import load_project_info

DEFAULT_VERB = "Building"
BANNER_PREFIX = "┋ "

# Messages already printed by this process
_emitted: set[str] = set()
_emitted_lock = threading.Lock()


def capitalize(word: str) -> str:
    """Uppercase the first character of word."""
    return word[:1].upper() + word[1:]


def emit(message: str) -> bool:
    """Print a banner message unless this process already printed it.

    Returns:
        True if the message was printed
    """
    with _emitted_lock:
        if message in _emitted:
            return False
        _emitted.add(message)

    ctx = get_output_context()
    if ctx.json_mode:
        ctx.print_json({"banner": message})
    else:
        for line in message.split("\n"):
            ctx.print(escape(BANNER_PREFIX + line))
    return True


def project_information(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-p",
        help="Project directory containing pyproject.toml",
    ),
    verb: str | None = typer.Option(
        None,
        "--verb",
        help=f"Verb to prefix the project name with (default: {DEFAULT_VERB})",
    ),
) -> None:
    """Print a one-line banner describing what is being built."""
    ctx = get_output_context()
    try:
        config = load_config(project_dir)
    except (OSError, ValueError, ValidationError) as e:
        ctx.error(f"Invalid buildmeta configuration: {e}")
        raise typer.Exit(1) from None

    try:
        project = load_project_info(project_dir, display_name=config.name)
    except ProjectInfoError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    name = project.name if project else project_dir.resolve().name
    emit(f"{capitalize(verb or config.verb or DEFAULT_VERB)} {name}")
