import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

load_dotenv()


def _split_hosts(value: str) -> tuple[str, ...]:
    return tuple(host.strip() for host in value.split(",") if host.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Metadata store
    database_url: str = os.getenv("DATABASE_URL", "postgresql://localhost/packages")
    database_pool_size: int = int(os.getenv("DATABASE_POOL_SIZE", "20"))

    # List cache
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_username: str | None = os.getenv("REDIS_USERNAME")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    package_list_cache_key: str = os.getenv("PACKAGE_LIST_CACHE_KEY", "packages")

    # Legacy traffic migration
    upstream_origin: str = os.getenv("UPSTREAM_ORIGIN", "https://registry.bower.io")
    migrated_hosts: tuple[str, ...] = field(
        default_factory=lambda: _split_hosts(
            os.getenv("MIGRATED_HOSTS", "registry.bower.io,components.bower.io")
        )
    )
    redirect_delay_seconds: float = float(os.getenv("REDIRECT_DELAY_SECONDS", "10"))

    # Local application server everything else is delegated to
    delegate_url: str = os.getenv("DELEGATE_URL", "http://localhost:3001")
    delegate_command: str | None = os.getenv("DELEGATE_COMMAND")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def async_database_url(self) -> str:
        """Database URL with the asyncpg driver selected.

        Hosting platforms hand out ``postgres://`` URLs, which SQLAlchemy
        no longer accepts, so both plain schemes are rewritten.
        """
        for scheme in ("postgres://", "postgresql://"):
            if self.database_url.startswith(scheme):
                return "postgresql+asyncpg://" + self.database_url[len(scheme):]
        return self.database_url

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.redirect_delay_seconds < 0:
            raise ValueError("REDIRECT_DELAY_SECONDS must not be negative")

        if not self.upstream_origin:
            raise ValueError("UPSTREAM_ORIGIN must not be empty")

        if self.database_pool_size < 1:
            raise ValueError(
                f"DATABASE_POOL_SIZE must be positive, got {self.database_pool_size}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the gateway process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance.

    Credentials are only sent when configured.
    """
    return redis.from_url(
        settings.redis_url,
        username=settings.redis_username,
        password=settings.redis_password,
        decode_responses=False,
    )


def get_database_engine() -> AsyncEngine:
    """Create the pooled engine for the metadata store."""
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=0,
    )
