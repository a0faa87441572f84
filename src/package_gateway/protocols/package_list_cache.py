"""Package list cache protocol.

Read-only view over the cache entry holding the pre-serialized package
list. Populating the entry happens elsewhere.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PackageListCache(Protocol):
    """Protocol for the package list cache."""

    async def get_package_list(self) -> bytes | None:
        """Read the cached package list payload.

        Returns:
            The raw bytes, or None when the key is absent

        Raises:
            Exception: Any cache client failure propagates
        """
        ...

    async def health_check(self) -> bool:
        """Check if the cache is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
