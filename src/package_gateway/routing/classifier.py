"""Request predicates and the rule type.

Predicates are plain callables over the incoming request. They are
side-effect free and can be evaluated in any number, in any order.
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import Response

from package_gateway.handlers.migration_handler import SEARCH_PREFIX
from package_gateway.utils import request_path

LIST_PATH = "/packages"
PACKAGE_PREFIX = "/packages/"

Predicate = Callable[[Request], bool]
Handler = Callable[[Request], Awaitable[Response | None]]


@dataclass(frozen=True)
class Rule:
    """A named classification rule.

    Attributes:
        name: Label used in logs
        predicate: Decides whether the rule applies to a request
        handler: Produces the response, or None to decline
    """

    name: str
    predicate: Predicate
    handler: Handler


def is_get(request: Request) -> bool:
    return request.method == "GET"


def path_is(path: str) -> Predicate:
    """Match GET requests whose path equals ``path`` exactly."""

    def predicate(request: Request) -> bool:
        return is_get(request) and request_path(request) == path

    return predicate


def package_prefix(prefix: str = PACKAGE_PREFIX, excluded: str = SEARCH_PREFIX) -> Predicate:
    """Match GET requests under ``prefix`` but outside ``excluded``.

    Search requests live under the package namespace and are answered by
    the migration responder instead.
    """

    def predicate(request: Request) -> bool:
        path = request_path(request)
        return is_get(request) and path.startswith(prefix) and not path.startswith(excluded)

    return predicate


def from_unmigrated_host(migrated_hosts: Iterable[str]) -> Predicate:
    """Match GET requests whose Host header is not a migrated host.

    The header is compared verbatim, port included.
    """
    hosts = frozenset(migrated_hosts)

    def predicate(request: Request) -> bool:
        return is_get(request) and request.headers.get("host", "") not in hosts

    return predicate
