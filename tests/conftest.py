"""
Shared fixtures: in-memory backends and a gateway app wired to them.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from package_gateway.api.app import create_app
from package_gateway.entities import Package
from package_gateway.handlers import MigrationHandler, PackageHandler
from package_gateway.proxy import DelegationForwarder
from package_gateway.routing import Dispatcher, build_rules
from package_gateway.services import PackageResolver

MIGRATED_HOSTS = ("registry.bower.io", "components.bower.io")
UPSTREAM = "https://registry.bower.io"
DELEGATE_URL = "http://localhost:3001"


class InMemoryPackageStore:
    """PackageStore backed by a dict; records every name looked up."""

    def __init__(self, packages=None, error=None):
        self.packages = {p.name: p for p in packages or []}
        self.error = error
        self.queries = []

    async def find_by_name(self, name):
        self.queries.append(name)
        if self.error is not None:
            raise self.error
        return self.packages.get(name)

    async def health_check(self):
        return self.error is None


class InMemoryListCache:
    """PackageListCache holding a single optional payload."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.reads = 0

    async def get_package_list(self):
        self.reads += 1
        if self.error is not None:
            raise self.error
        return self.payload

    async def health_check(self):
        return self.error is None


class ChunkedBody(httpx.AsyncByteStream):
    """Response body that is only available by streaming it."""

    def __init__(self, *chunks: bytes):
        self._chunks = chunks

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


class RecordingDelegate:
    """httpx MockTransport handler standing in for the local server."""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            200,
            headers={"Content-Type": "text/plain", "X-Delegate": "node"},
            stream=ChunkedBody(b"delegated ", request.method.encode(), b" ", request.url.raw_path),
        )


def make_request(method="GET", path="/", host="legacy.example.com", query=""):
    """Build a bare Starlette request for predicate and handler tests."""
    scope = {
        "type": "http",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query.encode(),
        "headers": [(b"host", host.encode())],
        "server": ("testserver", 80),
    }
    return Request(scope)


@pytest.fixture
def jquery():
    return Package(name="jquery", url="https://github.com/jquery/jquery-dist.git")


@pytest.fixture
def store(jquery):
    return InMemoryPackageStore([jquery])


@pytest.fixture
def list_cache():
    return InMemoryListCache(b'[{"name":"jquery","url":"https://github.com/jquery/jquery-dist.git"}]')


@pytest.fixture
def resolver(store, list_cache):
    return PackageResolver(store=store, list_cache=list_cache)


@pytest.fixture
def delegate():
    return RecordingDelegate()


@pytest.fixture
def forwarder(delegate):
    client = httpx.AsyncClient(transport=httpx.MockTransport(delegate))
    return DelegationForwarder(client=client, delegate_url=DELEGATE_URL)


@pytest.fixture
def dispatcher(resolver, forwarder):
    rules = build_rules(
        migration_handler=MigrationHandler(upstream_origin=UPSTREAM, delay_seconds=0),
        package_handler=PackageHandler(resolver=resolver),
        migrated_hosts=MIGRATED_HOSTS,
    )
    return Dispatcher(rules=rules, fallback=forwarder.forward)


@pytest.fixture
def client(dispatcher):
    """Create a test client around the in-memory gateway."""
    app = create_app(lifespan=None)
    app.state.dispatcher = dispatcher
    return TestClient(app)
