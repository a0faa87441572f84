"""PostgreSQL implementation of PackageStore.

Uses a pooled SQLAlchemy async engine. The lookup is a single
parameterized statement; asyncpg prepares and caches it per connection.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from package_gateway.config import get_database_engine
from package_gateway.entities import Package

GET_PACKAGE = text("SELECT name, url FROM packages WHERE name = :name")


class PostgresPackageRepository:
    """PostgreSQL-backed package store.

    This class satisfies the PackageStore protocol through structural
    typing - no explicit inheritance needed. The engine is shared by all
    request tasks; the repository never disposes it.
    """

    def __init__(self, engine: AsyncEngine | None = None) -> None:
        """Initialize the repository.

        Args:
            engine: Async engine instance. If None, creates default.
        """
        self._engine = engine or get_database_engine()

    @classmethod
    def create(cls, engine: AsyncEngine | None = None) -> "PostgresPackageRepository":
        """Factory method to create PostgresPackageRepository with defaults."""
        return cls(engine=engine)

    async def find_by_name(self, name: str) -> Package | None:
        """Fetch a package by its exact name.

        Args:
            name: The package name

        Returns:
            The package, or None when no row matches
        """
        async with self._engine.connect() as conn:
            result = await conn.execute(GET_PACKAGE, {"name": name})
            row = result.first()

        if row is None:
            return None
        return Package(name=row.name, url=row.url)

    async def health_check(self) -> bool:
        """Check if PostgreSQL is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    @property
    def engine(self) -> AsyncEngine:
        """Get the underlying engine."""
        return self._engine
