"""Repository layer for data access.

This layer abstracts external dependencies (PostgreSQL, Redis) behind
protocol-based interfaces. The repositories are protocol-based
(structural typing), not inheritance-based.
"""

from package_gateway.protocols import PackageListCache, PackageStore

from .postgres_repository import PostgresPackageRepository
from .redis_repository import RedisPackageListRepository

__all__ = [
    "PackageListCache",
    "PackageStore",
    "PostgresPackageRepository",
    "RedisPackageListRepository",
]
