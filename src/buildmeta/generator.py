"""Writes build.properties for the current build.

generate() takes an output directory followed by key/value pairs. Recognized
keys are validated before anything is written:

- commit-timestamp: ISO-8601 date-time with an offset or zone
- commit-long-hash: characters 0-9 and a-f only
- no-local-modifications: exactly "true" or "false"

Other keys are written through unchanged. The build date, number and name
come from the commit timestamp when the checkout was clean, and from today's
date otherwise.
"""

import logging
from pathlib import Path

from .constants import BUILD_PROPERTIES
from .errors import ArgumentError
from .metadata import (
    KEY_BUILD_NAME,
    KEY_GIT_COMMIT_HASH,
    KEY_GIT_COMMIT_TIMESTAMP,
    KEY_GIT_REPO_CLEAN,
    BuildMetadata,
    MetadataType,
    parse_timestamp,
)
from .properties import write_properties

logger = logging.getLogger(__name__)

USAGE = "Usage: buildmeta generate [output-folder] ([key] [value])*"

_HASH_CHARACTERS = frozenset("0123456789abcdef")


def _validate(key: str, value: str) -> None:
    if key == KEY_GIT_COMMIT_TIMESTAMP:
        try:
            parse_timestamp(value)
        except ValueError:
            raise ArgumentError(
                f"{key} must be in ISO 8601 instant format, but got {value}"
            ) from None
    elif key == KEY_GIT_REPO_CLEAN:
        if value not in ("true", "false"):
            raise ArgumentError(f"{key} must be either 'true' or 'false' but got '{value}'")
    elif key == KEY_GIT_COMMIT_HASH:
        if not set(value) <= _HASH_CHARACTERS:
            raise ArgumentError(f"Valid characters in a git hash are 0-9 a-f, but got '{value}'")


def collect_additional_properties(arguments: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Turn a flat [key, value]* list into validated properties.

    Raises:
        ArgumentError: If the pairs are unbalanced or a recognized key has an
            invalid value
    """
    if len(arguments) % 2:
        raise ArgumentError(
            f"Following key/value pairs must be balanced, but {len(arguments)} passed: "
            f"{list(arguments)}"
        )
    properties: dict[str, str] = {}
    for key, value in zip(arguments[::2], arguments[1::2], strict=True):
        _validate(key, value)
        properties[key] = value
    return properties


def generate(output_directory: str | Path | None, *arguments: str) -> Path | None:
    """Write build.properties into output_directory.

    Args:
        output_directory: Directory to write into; created if missing.
            None prints usage and writes nothing.
        *arguments: Additional properties in key, value, key, value order

    Returns:
        Path of the written file, or None when only usage was shown

    Raises:
        ArgumentError: If the arguments are invalid; nothing is written
    """
    if output_directory is None:
        logger.error(USAGE)
        return None

    additional = collect_additional_properties(arguments)
    properties = BuildMetadata(None, MetadataType.CURRENT, additional).build_properties()
    path = write_properties(Path(output_directory) / BUILD_PROPERTIES, properties)
    logger.info("Wrote %s (%s)", path, properties.get(KEY_BUILD_NAME))
    return path
