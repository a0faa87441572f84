"""Dispatch engine.

Applies the ordered rules to each request and invokes exactly one
handler. A handler that declines, or no match at all, sends the request
to the fallback (the delegation forwarder), which never consults the
rules again.
"""

import logging
from collections.abc import Iterable, Sequence

from fastapi import Request
from fastapi.responses import Response

from package_gateway.handlers import MigrationHandler, PackageHandler
from package_gateway.utils import request_path

from .classifier import LIST_PATH, Handler, Rule, from_unmigrated_host, package_prefix, path_is

logger = logging.getLogger(__name__)


def build_rules(
    migration_handler: MigrationHandler,
    package_handler: PackageHandler,
    migrated_hosts: Iterable[str],
) -> list[Rule]:
    """Build the gateway's rules in priority order.

    The migration rule comes first: for GET traffic from unmigrated hosts
    it wins over the list and lookup rules, so only migrated hosts ever
    reach the resolver.
    """
    return [
        Rule("migrate", from_unmigrated_host(migrated_hosts), migration_handler.handle),
        Rule("list-packages", path_is(LIST_PATH), package_handler.list_packages),
        Rule("get-package", package_prefix(), package_handler.get_package),
    ]


class Dispatcher:
    """First-match-wins dispatcher.

    Example:
        ```python
        dispatcher = Dispatcher(
            rules=build_rules(migration_handler, package_handler, settings.migrated_hosts),
            fallback=forwarder.forward,
        )
        response = await dispatcher.dispatch(request)
        ```
    """

    def __init__(self, rules: Sequence[Rule], fallback: Handler) -> None:
        """Initialize the dispatcher.

        Args:
            rules: Rules in evaluation order.
            fallback: Handler for requests no rule answers. Must return a response.
        """
        self._rules = tuple(rules)
        self._fallback = fallback

    async def dispatch(self, request: Request) -> Response:
        """Route a request to the first matching rule, or delegate it."""
        rule = self.match(request)
        if rule is not None:
            logger.debug("%s %s matched rule %s", request.method, request_path(request), rule.name)
            response = await rule.handler(request)
            if response is not None:
                return response
            logger.debug("Rule %s declined %s, delegating", rule.name, request_path(request))

        return await self._fallback(request)

    def match(self, request: Request) -> Rule | None:
        """Return the first rule whose predicate holds, without invoking it."""
        for rule in self._rules:
            if rule.predicate(request):
                return rule
        return None

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Get the rules in evaluation order."""
        return self._rules
