"""Metadata store protocol.

Defines the interface for the relational store that holds one
``(name, url)`` row per registered package.
"""

from typing import Protocol, runtime_checkable

from package_gateway.entities import Package


@runtime_checkable
class PackageStore(Protocol):
    """Protocol for package metadata stores.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    async def find_by_name(self, name: str) -> Package | None:
        """Fetch a package by its exact name.

        Args:
            name: The package name, passed to the query verbatim

        Returns:
            The package, or None when no row matches

        Raises:
            Exception: Any store failure (connectivity, decoding) propagates
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
