"""
Tests for package and migration handlers.
"""

import asyncio
import json
import time

from package_gateway.config import settings
from package_gateway.entities import Package
from package_gateway.handlers import CACHE_CONTROL, MigrationHandler, PackageHandler
from package_gateway.handlers.migration_handler import build_redirect_location
from package_gateway.services import PackageResolver

from .conftest import UPSTREAM, InMemoryListCache, InMemoryPackageStore, make_request


async def test_get_package_renders_json_with_cache_control(resolver):
    handler = PackageHandler(resolver=resolver)

    response = await handler.get_package(make_request(path="/packages/jquery"))

    assert response.status_code == 200
    assert response.headers["cache-control"] == CACHE_CONTROL
    assert response.headers["content-type"] == "application/json"
    assert response.body == b'{"name":"jquery","url":"https://github.com/jquery/jquery-dist.git"}'


async def test_get_package_uses_last_segment(resolver, store):
    handler = PackageHandler(resolver=resolver)

    response = await handler.get_package(make_request(path="/packages/a/b/jquery"))

    assert response.status_code == 200
    assert store.queries == ["jquery"]


async def test_get_missing_package(resolver):
    handler = PackageHandler(resolver=resolver)

    response = await handler.get_package(make_request(path="/packages/missing"))

    assert response.status_code == 404
    assert response.body == b"Package not found"
    assert "cache-control" not in response.headers


async def test_get_package_store_error_hides_detail(list_cache):
    store = InMemoryPackageStore(error=RuntimeError("password authentication failed"))
    handler = PackageHandler(resolver=PackageResolver(store=store, list_cache=list_cache))

    response = await handler.get_package(make_request(path="/packages/jquery"))

    assert response.status_code == 500
    assert response.body == b"Internal server error"


async def test_get_package_unserializable_row(list_cache):
    store = InMemoryPackageStore([Package(name="broken", url=None)])
    handler = PackageHandler(resolver=PackageResolver(store=store, list_cache=list_cache))

    response = await handler.get_package(make_request(path="/packages/broken"))

    assert response.status_code == 500
    assert response.body == b"Internal server error"


async def test_list_packages_hit(resolver, list_cache):
    handler = PackageHandler(resolver=resolver)

    response = await handler.list_packages(make_request(path="/packages"))

    assert response.status_code == 200
    assert response.body == list_cache.payload
    assert response.headers["cache-control"] == CACHE_CONTROL


async def test_list_packages_miss_declines(store):
    handler = PackageHandler(resolver=PackageResolver(store=store, list_cache=InMemoryListCache()))
    assert await handler.list_packages(make_request(path="/packages")) is None


async def test_list_packages_cache_error_declines(store):
    cache = InMemoryListCache(error=ConnectionError("refused"))
    handler = PackageHandler(resolver=PackageResolver(store=store, list_cache=cache))
    assert await handler.list_packages(make_request(path="/packages")) is None


async def test_search_returns_deprecation_notice_immediately():
    handler = MigrationHandler(upstream_origin=UPSTREAM, delay_seconds=30)

    start = time.monotonic()
    response = await handler.handle(make_request(path="/packages/search/jquery"))
    elapsed = time.monotonic() - start

    assert elapsed < 1
    assert response.status_code == 200
    body = json.loads(response.body)
    assert len(body) == 1
    assert body[0]["name"] == "deprecated"
    assert "npm update -g bower" in body[0]["url"]


async def test_redirect_waits_for_delay():
    handler = MigrationHandler(upstream_origin=UPSTREAM, delay_seconds=0.2)

    start = time.monotonic()
    response = await handler.handle(make_request(path="/packages/jquery", query="v=1"))
    elapsed = time.monotonic() - start

    assert elapsed >= 0.2
    assert response.status_code == 308
    assert response.headers["location"] == "https://registry.bower.io/packages/jquery?v=1"


async def test_redirect_delays_are_independent():
    """Concurrent throttled requests wait side by side, not in turn."""
    handler = MigrationHandler(upstream_origin=UPSTREAM, delay_seconds=0.3)
    requests = [make_request(path=f"/packages/p{i}") for i in range(5)]

    start = time.monotonic()
    responses = await asyncio.gather(*(handler.handle(r) for r in requests))
    elapsed = time.monotonic() - start

    assert elapsed < 1.0
    assert [r.headers["location"] for r in responses] == [
        f"https://registry.bower.io/packages/p{i}" for i in range(5)
    ]


def test_default_delay_comes_from_settings():
    assert MigrationHandler().delay_seconds == settings.redirect_delay_seconds


def test_redirect_location_without_query():
    assert build_redirect_location(UPSTREAM, "/", "") == "https://registry.bower.io/"


def test_redirect_location_keeps_query_unchanged():
    location = build_redirect_location(UPSTREAM, "/packages", "a=1&b=%20x")
    assert location == "https://registry.bower.io/packages?a=1&b=%20x"


async def test_get_package_name_keeps_decoded_question_mark(resolver, store):
    handler = PackageHandler(resolver=resolver)

    response = await handler.get_package(make_request(path="/packages/foo?bar"))

    assert response.status_code == 404
    assert store.queries == ["foo?bar"]


async def test_search_prefix_checked_on_full_path():
    handler = MigrationHandler(upstream_origin=UPSTREAM, delay_seconds=0)

    response = await handler.handle(make_request(path="/packages/search?/jq"))

    assert response.status_code == 308
    assert response.headers["location"] == "https://registry.bower.io/packages/search?/jq"
