"""Reading and writing `key = value` properties files.

The format is deliberately simple: one `key = value` entry per line, keys
sorted on output. Nothing is escaped, so values containing line breaks
cannot be written faithfully.

Decoding scans the whole text rather than individual lines, matching files
written by earlier releases. One consequence: the whitespace after `=` may
span a line break, so an entry with an empty value swallows the following
line as its value.
"""

import re
from collections.abc import Mapping
from pathlib import Path

_ENTRY = re.compile(r"([\w-]+?)\s*=\s*([^\r\n]*)", re.ASCII)


def encode(properties: Mapping[str, str]) -> str:
    """Serialize properties to text, one sorted `key = value` line each."""
    return "".join(f"{key} = {properties[key]}\n" for key in sorted(properties))


def decode(text: str) -> dict[str, str]:
    """Parse properties text into a dict.

    Best effort: text without any entries yields an empty dict, and a
    repeated key keeps its last value.
    """
    return {match.group(1): match.group(2) for match in _ENTRY.finditer(text)}


def read_properties(path: Path) -> dict[str, str]:
    """Read and decode a properties file.

    Args:
        path: File to read

    Returns:
        Decoded properties
    """
    return decode(path.read_text(encoding="utf-8"))


def write_properties(path: Path, properties: Mapping[str, str]) -> Path:
    """Encode properties and write them to a file.

    Args:
        path: File to write; parent directories are created
        properties: Properties to write

    Returns:
        The written path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(properties), encoding="utf-8")
    return path
