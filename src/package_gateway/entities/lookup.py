"""Lookup outcome entities.

Store and cache failures are carried as values so handlers can map
every outcome onto a response without catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum

from .package import Package


class LookupStatus(str, Enum):
    """Outcome of a single read against the store or the cache."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class PackageLookup:
    """Result of resolving a single package by name."""

    status: LookupStatus
    package: Package | None = None

    @classmethod
    def found(cls, package: Package) -> "PackageLookup":
        return cls(status=LookupStatus.FOUND, package=package)

    @classmethod
    def not_found(cls) -> "PackageLookup":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def error(cls) -> "PackageLookup":
        return cls(status=LookupStatus.ERROR)


@dataclass(frozen=True)
class PackageListLookup:
    """Result of reading the pre-serialized package list.

    ``payload`` holds the cached bytes unchanged on a hit. A miss and an
    error are kept apart here even though both are served the same way.
    """

    status: LookupStatus
    payload: bytes | None = None

    @property
    def is_hit(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def hit(cls, payload: bytes) -> "PackageListLookup":
        return cls(status=LookupStatus.FOUND, payload=payload)

    @classmethod
    def miss(cls) -> "PackageListLookup":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def error(cls) -> "PackageListLookup":
        return cls(status=LookupStatus.ERROR)
