"""Package resolver.

Combines the metadata store and the list cache into the two read
operations the gateway serves. Store and cache failures are turned into
lookup outcomes here; nothing raised by a backend reaches the handlers.
"""

import logging

from package_gateway.entities import PackageListLookup, PackageLookup
from package_gateway.protocols import PackageListCache, PackageStore

logger = logging.getLogger(__name__)


def extract_package_name(path: str) -> str:
    """Return the last ``/``-delimited segment of a request path.

    No decoding or validation is applied, so ``/packages/a/b/c`` yields
    ``c`` and a trailing slash yields the empty string.
    """
    return path.split("/")[-1]


class PackageResolver:
    """Resolves packages against the store and the package list cache.

    Example:
        ```python
        resolver = PackageResolver(
            store=PostgresPackageRepository.create(),
            list_cache=RedisPackageListRepository.create(),
        )

        lookup = await resolver.resolve_package("jquery")
        if lookup.status is LookupStatus.FOUND:
            print(lookup.package.url)
        ```
    """

    def __init__(self, store: PackageStore, list_cache: PackageListCache) -> None:
        """Initialize the resolver.

        Args:
            store: Package metadata store (required).
            list_cache: Cache holding the serialized package list (required).
        """
        self._store = store
        self._list_cache = list_cache

    async def resolve_package(self, name: str) -> PackageLookup:
        """Look up a single package by name.

        Args:
            name: The package name, used verbatim

        Returns:
            FOUND with the package, NOT_FOUND when no row matches,
            or ERROR for any store failure
        """
        try:
            package = await self._store.find_by_name(name)
        except Exception:
            logger.exception("Package lookup failed for %r", name)
            return PackageLookup.error()

        if package is None:
            return PackageLookup.not_found()
        return PackageLookup.found(package)

    async def resolve_package_list(self) -> PackageListLookup:
        """Read the pre-serialized package list from the cache.

        Returns:
            HIT with the cached bytes, MISS when the key is absent,
            or ERROR when the cache client fails
        """
        try:
            payload = await self._list_cache.get_package_list()
        except Exception as e:
            logger.warning("Package list cache read failed: %s", e)
            return PackageListLookup.error()

        if payload is None:
            logger.debug("Package list cache miss")
            return PackageListLookup.miss()
        return PackageListLookup.hit(payload)

    @property
    def store(self) -> PackageStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def list_cache(self) -> PackageListCache:
        """Get the underlying list cache (for testing)."""
        return self._list_cache
