"""CLI command implementations for buildmeta.

Each command lives in its own module; cli.py wires them into the Typer app.
"""

from .build_metadata import build_metadata
from .generate import generate
from .init import init
from .project_information import project_information
from .show import show

__all__ = [
    "build_metadata",
    "generate",
    "init",
    "project_information",
    "show",
]
