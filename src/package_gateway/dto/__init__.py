"""Data Transfer Objects for API contracts.

These Pydantic models define the JSON bodies the gateway writes.
Internal domain logic should use entities from the entities package.
"""

from .responses import PackageResponse

__all__ = [
    "PackageResponse",
]
