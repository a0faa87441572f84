"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Clients and services built once during lifespan
    - Dependency functions retrieve from request.app.state
    - Request handlers share the clients and never close them
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from package_gateway.config import get_database_engine, get_redis_client, settings
from package_gateway.errors import StartupError
from package_gateway.handlers import MigrationHandler, PackageHandler
from package_gateway.proxy import DelegateProcess, DelegationForwarder
from package_gateway.repositories import PostgresPackageRepository, RedisPackageListRepository
from package_gateway.routing import Dispatcher, build_rules
from package_gateway.services import PackageResolver

logger = logging.getLogger(__name__)


def build_dispatcher(resolver: PackageResolver, forwarder: DelegationForwarder) -> Dispatcher:
    """Wire handlers and rules around a resolver and a forwarder.

    Args:
        resolver: Package resolver over the store and list cache
        forwarder: Relay used for everything no rule answers

    Returns:
        The dispatcher serving every request
    """
    rules = build_rules(
        migration_handler=MigrationHandler(),
        package_handler=PackageHandler(resolver=resolver),
        migrated_hosts=settings.migrated_hosts,
    )
    return Dispatcher(rules=rules, fallback=forwarder.forward)


def get_dispatcher(request: Request) -> Dispatcher:
    """Dependency injection for Dispatcher from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The Dispatcher instance from app.state

    Raises:
        RuntimeError: If dispatcher is not initialized
    """
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise RuntimeError("Dispatcher not initialized. Check lifespan setup.")
    return dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Builds the process-scoped clients and stores the wired dispatcher in
    app.state:
    1. Metadata store engine and list cache client, checked once
    2. Delegate process, when a launch command is configured
    3. Resolver, handlers and rules around a shared HTTP client

    Any failure here is fatal; the server does not start.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    engine = get_database_engine()
    redis_client = get_redis_client()
    store = PostgresPackageRepository.create(engine=engine)
    list_cache = RedisPackageListRepository.create(redis_client=redis_client)

    try:
        if not await store.health_check():
            raise StartupError("Metadata store connection error")
        if not await list_cache.health_check():
            raise StartupError("List cache connection error")
    except StartupError as e:
        logger.critical("%s", e)
        await redis_client.aclose()
        await engine.dispose()
        raise

    delegate = None
    if settings.delegate_command:
        delegate = DelegateProcess.from_url(settings.delegate_command, settings.delegate_url)
        try:
            await delegate.start()
        except StartupError as e:
            logger.critical("%s", e)
            await redis_client.aclose()
            await engine.dispose()
            raise

    # Store and cache calls have no timeout, neither does the relay
    http_client = httpx.AsyncClient(timeout=None)
    forwarder = DelegationForwarder(client=http_client, delegate_url=settings.delegate_url)
    resolver = PackageResolver(store=store, list_cache=list_cache)

    app.state.dispatcher = build_dispatcher(resolver, forwarder)

    logger.info("Starting web server at port %s", settings.api_port)

    yield

    del app.state.dispatcher
    await http_client.aclose()
    if delegate is not None:
        await delegate.stop()
    await redis_client.aclose()
    await engine.dispose()
    logger.info("Gateway shut down")

