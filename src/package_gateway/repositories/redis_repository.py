"""Redis implementation of PackageListCache."""

import redis.asyncio as redis

from package_gateway.config import get_redis_client, settings


class RedisPackageListRepository:
    """Read-only accessor for the cached package list.

    This class satisfies the PackageListCache protocol through structural
    typing. The value under the key is returned byte for byte; it is
    expected to be a JSON array of ``{name, url}`` records but is not
    validated here.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key: str | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key: Cache key of the package list. If None, uses settings.
        """
        self._client = redis_client or get_redis_client()
        self._key = key or settings.package_list_cache_key

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        key: str | None = None,
    ) -> "RedisPackageListRepository":
        """Factory method to create RedisPackageListRepository with defaults."""
        return cls(redis_client=redis_client, key=key)

    async def get_package_list(self) -> bytes | None:
        """Read the cached package list payload.

        Returns:
            The raw bytes, or None when the key is absent
        """
        return await self._client.get(self._key)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except Exception:
            return False

    @property
    def key(self) -> str:
        """Get the cache key the list is read from."""
        return self._key

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
