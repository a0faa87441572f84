"""Request classification and dispatch.

Rules are ``(predicate, handler)`` pairs evaluated in registration
order; the first rule whose predicate holds handles the request.
Requests no rule answers are delegated to the local application server.
"""

from .classifier import (
    LIST_PATH,
    PACKAGE_PREFIX,
    SEARCH_PREFIX,
    Rule,
    from_unmigrated_host,
    is_get,
    package_prefix,
    path_is,
)
from .dispatcher import Dispatcher, build_rules

__all__ = [
    "LIST_PATH",
    "PACKAGE_PREFIX",
    "SEARCH_PREFIX",
    "Dispatcher",
    "Rule",
    "build_rules",
    "from_unmigrated_host",
    "is_get",
    "package_prefix",
    "path_is",
]
