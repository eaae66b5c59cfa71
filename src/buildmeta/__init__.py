"""buildmeta: build numbers, build names and git provenance for Python projects."""

from .build_name import build_name, build_number
from .errors import ArgumentError, MetadataError, ResourceNotFoundError
from .generator import generate
from .metadata import BuildMetadata, MetadataRegistry, MetadataType, build_metadata
from .properties import decode, encode, read_properties, write_properties

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "BuildMetadata",
    "MetadataError",
    "MetadataRegistry",
    "MetadataType",
    "ResourceNotFoundError",
    "__version__",
    "build_metadata",
    "build_name",
    "build_number",
    "decode",
    "encode",
    "generate",
    "read_properties",
    "write_properties",
]
