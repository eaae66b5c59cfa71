"""Build metadata resolution.

A BuildMetadata record answers "which build is this?" for a project. It is
backed by a property bag that is either computed now (CURRENT, used while
building) or read from the `<Name>-build.properties` resource packaged next
to an anchor class or module (PROJECT, used at runtime).

The build date follows one rule: if the bag carries a commit timestamp and
says the checkout had no local modifications, the commit's calendar date is
the build date. Otherwise the build date is today in UTC. Build number and
build name always derive from the build date.

Example:
    >>> from buildmeta.metadata import build_metadata
    >>> meta = build_metadata(MyApplication)
    >>> meta.build_properties()["build-name"]
    'sparkling piglet'
"""

import logging
import re
import sys
import threading
from collections.abc import Callable, Hashable, Mapping
from datetime import UTC, date, datetime
from enum import Enum
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, Generic, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .build_name import build_name, build_number
from .errors import ResourceNotFoundError
from .properties import decode

logger = logging.getLogger(__name__)

KEY_BUILD_NAME = "build-name"
KEY_BUILD_DATE = "build-date"
KEY_BUILD_NUMBER = "build-number"
KEY_GIT_COMMIT_TIMESTAMP = "commit-timestamp"
KEY_GIT_COMMIT_HASH = "commit-long-hash"
KEY_GIT_REPO_CLEAN = "no-local-modifications"

BUILD_DATE_FORMAT = "%Y.%m.%d"
SHORT_HASH_LENGTH = 7

_ZONE_SUFFIX = re.compile(r"^(?P<stamp>[^\[]+?)(?:\[(?P<zone>[^\]]+)\])?$")
_EXTENDED_DATE_TIME = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d{1,9})?)?(?:Z|[+-]\d{2}:\d{2}(?::\d{2})?)?",
    re.ASCII,
)

T = TypeVar("T")


class MetadataType(str, Enum):
    """Where a metadata record gets its properties."""

    PROJECT = "project"  # Packaged <Name>-build.properties resource
    CURRENT = "current"  # Computed from the current time and commit facts


def todays_date() -> date:
    """Return today's date in UTC."""
    return datetime.now(UTC).date()


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 date-time that carries an offset or zone.

    Only the extended format with a `T` separator is accepted, in forms like
    `2021-03-01T15:36:09Z`, `2021-03-01T15:36:09+02:00`
    and `2022-05-30T20:51:39Z[GMT]`. A bracketed region id converts the
    instant into that zone.

    Raises:
        ValueError: If the text is not a zoned ISO-8601 date-time
    """
    match = _ZONE_SUFFIX.match(text.strip())
    if match is None or not _EXTENDED_DATE_TIME.fullmatch(match["stamp"]):
        raise ValueError(f"Not an ISO-8601 date-time: {text!r}")
    try:
        moment = datetime.fromisoformat(match["stamp"])
    except ValueError as e:
        raise ValueError(f"Not an ISO-8601 date-time: {text!r}") from e

    if match["zone"]:
        try:
            zone = ZoneInfo(match["zone"])
        except (ZoneInfoNotFoundError, ValueError) as e:
            if moment.tzinfo is None:
                raise ValueError(f"Unknown time zone in {text!r}") from e
            logger.debug("Unknown zone %s, keeping offset of %s", match["zone"], text)
        else:
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=zone)
            else:
                moment = moment.astimezone(zone)

    if moment.tzinfo is None:
        raise ValueError(f"Date-time has no offset or zone: {text!r}")
    return moment


class _Once(Generic[T]):
    """Compute a value on first use and keep it forever."""

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._lock = threading.Lock()
        self._value: T | None = None
        self._done = False
        self._computing_thread: int | None = None

    def computing_here(self) -> bool:
        """Return True while the calling thread is computing the value."""
        return self._computing_thread == threading.get_ident()

    def get(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    self._computing_thread = threading.get_ident()
                    try:
                        self._value = self._compute()
                    finally:
                        self._computing_thread = None
                    self._done = True
        return self._value  # type: ignore[return-value]


def _anchor_module(anchor: Any) -> ModuleType:
    name = anchor.__name__ if isinstance(anchor, ModuleType) else anchor.__module__
    return sys.modules[name]


def _resource_root(anchor: Any) -> Traversable:
    """Return the directory that holds resources for an anchor."""
    module = _anchor_module(anchor)
    if hasattr(module, "__path__"):
        return resources.files(module.__name__)
    if module.__package__:
        return resources.files(module.__package__)
    # Top-level module outside any package
    return Path(module.__file__ or ".").resolve().parent


def _resource_name(anchor: Any, kind: str) -> str:
    return f"{anchor.__name__.rpartition('.')[2]}-{kind}.properties"


def _read_resource(anchor: Any, kind: str) -> str:
    """Read the `<Name>-<kind>.properties` resource for an anchor.

    Raises:
        ResourceNotFoundError: If there is no anchor, or the resource is
            missing or unreadable
    """
    if anchor is None:
        raise ResourceNotFoundError(f"No anchor to locate {kind} metadata from")
    name = _resource_name(anchor, kind)
    try:
        resource = _resource_root(anchor).joinpath(name)
        if not resource.is_file():
            module = _anchor_module(anchor).__name__
            raise ResourceNotFoundError(f"No metadata found relative to {module} at {name}")
        return resource.read_text(encoding="utf-8").strip()
    except ResourceNotFoundError:
        raise
    except (OSError, KeyError, TypeError, ModuleNotFoundError) as e:
        raise ResourceNotFoundError(f"Unable to read: {name}") from e


class BuildMetadata:
    """Build metadata for one project.

    Args:
        anchor: A class or module in the project, used to locate packaged
            resources. May be None for CURRENT metadata.
        metadata_type: Where the properties come from
        additional_properties: Properties overlaid on the resolved ones;
            an entry here wins over a computed or packaged value

    The build property bag is resolved on first use, including first use
    through an accessor, and never recomputed. Accessors on PROJECT metadata
    raise ResourceNotFoundError when the resource is missing.
    """

    def __init__(
        self,
        anchor: Any,
        metadata_type: MetadataType,
        additional_properties: Mapping[str, str] | None = None,
    ) -> None:
        self._anchor = anchor
        self._metadata_type = metadata_type
        self._additional_properties = MappingProxyType(dict(additional_properties or {}))
        self._build_properties = _Once(self._resolve_build_properties)
        self._project_properties: Mapping[str, str] = MappingProxyType({})
        self._project_lock = threading.Lock()

    @classmethod
    def from_properties(cls, properties: Mapping[str, str], anchor: Any = None) -> "BuildMetadata":
        """Create PROJECT metadata backed by an already decoded property bag.

        Args:
            properties: Build properties, e.g. from read_properties()
            anchor: Optional anchor for project_properties()

        Returns:
            A record whose build properties are already resolved
        """
        record = cls(anchor, MetadataType.PROJECT)
        bag = MappingProxyType(dict(sorted(properties.items())))
        record._build_properties = _Once(lambda: bag)
        record._build_properties.get()
        return record

    def __repr__(self) -> str:
        return f"BuildMetadata({self._anchor!r}, {self._metadata_type.name})"

    @property
    def metadata_type(self) -> MetadataType:
        return self._metadata_type

    def build_properties(self) -> Mapping[str, str]:
        """Return the build properties, similar to:

            build-number = 104
            build-date = 2021.03.18
            build-name = sparkling piglet

        Raises:
            ResourceNotFoundError: For PROJECT metadata without a packaged
                build properties resource
        """
        return self._build_properties.get()

    def project_properties(self) -> Mapping[str, str]:
        """Return the packaged project properties, similar to:

            project-name = My Application
            project-version = 1.3.5
            project-group-id = com.example
            project-artifact-id = my-application

        Raises:
            ResourceNotFoundError: If the project properties resource is missing
        """
        with self._project_lock:
            if not self._project_properties:
                properties = decode(_read_resource(self._anchor, "project"))
                self._project_properties = MappingProxyType(dict(sorted(properties.items())))
            return self._project_properties

    def current_build_date(self) -> date:
        """Return the commit date for a clean checkout, otherwise today in UTC."""
        timestamp = self.git_commit_timestamp()
        if timestamp is not None and self.is_clean_repository():
            return timestamp.date()
        return todays_date()

    def current_build_number(self) -> int:
        """Return the build number for current_build_date()."""
        return build_number(self.current_build_date())

    def current_build_name(self) -> str:
        """Return the build name for current_build_date()."""
        return build_name(self.current_build_number())

    def git_commit_hash(self) -> str | None:
        """Return the full commit hash, if recorded."""
        return self._properties().get(KEY_GIT_COMMIT_HASH)

    def short_git_commit_hash(self) -> str | None:
        """Return the 7-character commit hash, or None if no full hash is recorded."""
        commit_hash = self.git_commit_hash()
        if commit_hash is None or len(commit_hash) < SHORT_HASH_LENGTH:
            return None
        return commit_hash[:SHORT_HASH_LENGTH]

    def git_commit_timestamp(self) -> datetime | None:
        """Return the commit timestamp, if recorded and parseable."""
        text = self._properties().get(KEY_GIT_COMMIT_TIMESTAMP)
        if text is None:
            return None
        try:
            return parse_timestamp(text)
        except ValueError:
            logger.warning("Ignoring unparseable %s: %r", KEY_GIT_COMMIT_TIMESTAMP, text)
            return None

    def is_clean_repository(self) -> bool:
        """Return True if the checkout definitely had no local modifications at build time."""
        return self._properties().get(KEY_GIT_REPO_CLEAN) == "true"

    def _properties(self) -> Mapping[str, str]:
        # Resolution itself reads the clean flag and timestamp from the overrides
        if self._build_properties.computing_here():
            return self._additional_properties
        return self._build_properties.get()

    def _resolve_build_properties(self) -> Mapping[str, str]:
        if self._metadata_type is MetadataType.CURRENT:
            day = self.current_build_date()
            number = build_number(day)
            properties = {
                KEY_BUILD_NUMBER: str(number),
                KEY_BUILD_DATE: day.strftime(BUILD_DATE_FORMAT),
                KEY_BUILD_NAME: build_name(number),
            }
        else:
            properties = decode(_read_resource(self._anchor, "build"))
        properties.update(self._additional_properties)
        logger.debug("Resolved %s build properties: %s", self._metadata_type.value, properties)
        return MappingProxyType(dict(sorted(properties.items())))


class MetadataRegistry:
    """Process-wide cache of metadata records keyed by caller identity.

    The first record computed for a key is kept for the life of the process.
    """

    def __init__(self) -> None:
        self._records: dict[Hashable, BuildMetadata] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def get_or_compute(
        self, key: Hashable, compute: Callable[[Hashable], BuildMetadata]
    ) -> BuildMetadata:
        """Return the record for key, computing it atomically if absent."""
        with self._lock:
            record = self._records.get(key)
            if record is None:
                record = compute(key)
                self._records[key] = record
            return record


_registry = MetadataRegistry()


def build_metadata(anchor: Any) -> BuildMetadata:
    """Return the cached PROJECT metadata for the project containing anchor.

    Args:
        anchor: A class or module whose package ships `<Name>-build.properties`

    Returns:
        The same BuildMetadata instance on every call for this anchor
    """
    return _registry.get_or_compute(
        anchor, lambda key: BuildMetadata(key, MetadataType.PROJECT)
    )
