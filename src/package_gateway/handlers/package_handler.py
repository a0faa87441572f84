"""HTTP handlers for package list and package lookup requests."""

import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from package_gateway.dto import PackageResponse
from package_gateway.entities import LookupStatus
from package_gateway.services import PackageResolver, extract_package_name
from package_gateway.utils import request_path

logger = logging.getLogger(__name__)

# Published packages do not change under a given name
CACHE_CONTROL = "public, max-age=604800"

NOT_FOUND_MESSAGE = "Package not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _internal_error() -> Response:
    return PlainTextResponse(
        INTERNAL_ERROR_MESSAGE,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class PackageHandler:
    """Renders resolver outcomes as HTTP responses.

    Store failure details are logged by the resolver and never written to
    the response body.
    """

    def __init__(self, resolver: PackageResolver) -> None:
        """Initialize the package handler.

        Args:
            resolver: The package resolver (required).
        """
        self._resolver = resolver

    async def list_packages(self, request: Request) -> Response | None:
        """Handle GET /packages.

        Returns:
            The cached list verbatim, or None on a cache miss or cache
            error so the request falls through to delegation
        """
        lookup = await self._resolver.resolve_package_list()
        if not lookup.is_hit:
            return None

        return Response(
            content=lookup.payload,
            media_type="application/json",
            headers={"Cache-Control": CACHE_CONTROL},
        )

    async def get_package(self, request: Request) -> Response:
        """Handle GET /packages/<name>.

        The name is the last path segment, so ``/packages/a/b/c`` looks up
        ``c``.
        """
        name = extract_package_name(request_path(request))
        lookup = await self._resolver.resolve_package(name)

        if lookup.status is LookupStatus.NOT_FOUND:
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
        if lookup.status is LookupStatus.ERROR:
            return _internal_error()

        try:
            body = PackageResponse.from_entity(lookup.package).model_dump_json()
        except ValidationError:
            logger.exception("Could not serialize package %r", name)
            return _internal_error()

        return Response(
            content=body,
            media_type="application/json",
            headers={"Cache-Control": CACHE_CONTROL},
        )
