"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .lookup import LookupStatus, PackageListLookup, PackageLookup
from .package import Package

__all__ = ["LookupStatus", "Package", "PackageListLookup", "PackageLookup"]
