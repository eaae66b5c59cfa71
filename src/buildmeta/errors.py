"""Errors raised by buildmeta."""


class MetadataError(Exception):
    """Base exception for build metadata errors."""


class ArgumentError(MetadataError, ValueError):
    """Raised when generator arguments are malformed."""


class ResourceNotFoundError(MetadataError):
    """Raised when a packaged metadata resource cannot be found or read."""


class DomainError(MetadataError):
    """Raised when a build name cannot be derived."""


class ProjectInfoError(MetadataError):
    """Raised when project identity cannot be read from pyproject.toml."""
