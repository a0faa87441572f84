"""Handler layer for HTTP responses.

Handlers depend on services (business logic), not directly on repositories.
A handler returns a response, or None when it declines the request and
leaves it to the delegation path.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .migration_handler import MigrationHandler
from .package_handler import CACHE_CONTROL, PackageHandler

__all__ = [
    "CACHE_CONTROL",
    "MigrationHandler",
    "PackageHandler",
]
