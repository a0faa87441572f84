"""Responder for legacy registry traffic.

Clients that still talk to this gateway directly are pointed at the
canonical upstream registry: search requests get a deprecation notice,
everything else gets a throttled permanent redirect.
"""

import asyncio
import logging

from fastapi import Request, status
from fastapi.responses import Response

from package_gateway.config import settings
from package_gateway.dto import PackageResponse
from package_gateway.dto.responses import PackageListAdapter
from package_gateway.utils import request_path

logger = logging.getLogger(__name__)

SEARCH_PREFIX = "/packages/search/"

DEPRECATION_NOTICE = [
    PackageResponse(
        name="deprecated",
        url="This bower version is deprecated. Please update it: npm update -g bower",
    )
]


def build_redirect_location(upstream_origin: str, path: str, query: str) -> str:
    """Build the upstream URL for a legacy request.

    The query string is appended unchanged, and only when non-empty.
    """
    target = upstream_origin + path
    if query:
        target += "?" + query
    return target


class MigrationHandler:
    """Handles GET traffic from hosts not yet pointed at the upstream.

    Example:
        ```python
        handler = MigrationHandler(upstream_origin="https://registry.bower.io")
        response = await handler.handle(request)
        ```
    """

    def __init__(
        self,
        upstream_origin: str | None = None,
        delay_seconds: float | None = None,
    ) -> None:
        """Initialize the migration handler.

        Args:
            upstream_origin: Scheme and host redirects point at. Defaults to settings.
            delay_seconds: Throttle applied before each redirect. Defaults to settings.
        """
        self._upstream_origin = upstream_origin or settings.upstream_origin
        self._delay = settings.redirect_delay_seconds if delay_seconds is None else delay_seconds

    async def handle(self, request: Request) -> Response:
        """Answer a legacy request with a deprecation notice or a redirect."""
        if request_path(request).startswith(SEARCH_PREFIX):
            return self.deprecation_notice()
        return await self.throttled_redirect(request)

    def deprecation_notice(self) -> Response:
        """Return the synthetic search result telling clients to upgrade."""
        return Response(
            content=PackageListAdapter.dump_json(DEPRECATION_NOTICE),
            media_type="application/json",
        )

    async def throttled_redirect(self, request: Request) -> Response:
        """Suspend this request for the throttle delay, then redirect.

        Only the task serving this request waits; other requests proceed.
        """
        await asyncio.sleep(self._delay)

        location = build_redirect_location(
            self._upstream_origin,
            request_path(request),
            request.url.query,
        )
        logger.debug("Redirecting legacy request to %s", location)
        return Response(
            status_code=status.HTTP_308_PERMANENT_REDIRECT,
            media_type="application/json",
            headers={"Location": location},
        )

    @property
    def delay_seconds(self) -> float:
        """Get the throttle delay in seconds."""
        return self._delay
