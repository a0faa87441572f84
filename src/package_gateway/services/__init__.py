"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .package_resolver import PackageResolver, extract_package_name

__all__ = [
    "PackageResolver",
    "extract_package_name",
]
