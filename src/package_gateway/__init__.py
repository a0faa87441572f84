"""Package Gateway - package registry gateway with legacy traffic migration.

This package provides a layered architecture for serving registry reads:

Layers:
    - protocols: Interface contracts (PackageStore, PackageListCache)
    - repositories: Data access implementations (PostgreSQL, Redis)
    - services: Package resolution with miss/error semantics
    - handlers: HTTP responses for lookups and legacy traffic
    - routing: Ordered classification rules and the dispatcher
    - proxy: Relay to the local application server
    - dto: Data transfer objects (JSON bodies)
    - entities: Domain models (internal)

Usage:
    ```python
    from package_gateway.services import PackageResolver

    resolver = PackageResolver(store=store, list_cache=list_cache)
    lookup = await resolver.resolve_package("jquery")
    ```

For HTTP API:
    ```python
    from package_gateway.api.app import app
    ```
"""

from package_gateway.config import get_database_engine, get_redis_client, settings
from package_gateway.dto import PackageResponse
from package_gateway.entities import LookupStatus, Package, PackageListLookup, PackageLookup
from package_gateway.errors import StartupError
from package_gateway.handlers import MigrationHandler, PackageHandler
from package_gateway.protocols import PackageListCache, PackageStore
from package_gateway.proxy import DelegationForwarder
from package_gateway.repositories import PostgresPackageRepository, RedisPackageListRepository
from package_gateway.routing import Dispatcher, Rule, build_rules
from package_gateway.services import PackageResolver

__all__ = [
    # Configuration
    "settings",
    "get_database_engine",
    "get_redis_client",
    # Protocols (interfaces)
    "PackageListCache",
    "PackageStore",
    # Services (business logic)
    "PackageResolver",
    # Handlers (HTTP)
    "MigrationHandler",
    "PackageHandler",
    # Routing
    "Dispatcher",
    "Rule",
    "build_rules",
    "DelegationForwarder",
    # Repositories (data access)
    "PostgresPackageRepository",
    "RedisPackageListRepository",
    # Entities (domain models)
    "LookupStatus",
    "Package",
    "PackageListLookup",
    "PackageLookup",
    # DTOs (API contracts)
    "PackageResponse",
    "StartupError",
]
