"""Delegation forwarder.

Relays requests no rule answered to the local application server and
streams its response back unchanged.
"""

import logging
from collections.abc import Iterable

import httpx
from fastapi import Request, status
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from package_gateway.utils import request_path

logger = logging.getLogger(__name__)

HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def filter_hop_by_hop(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop hop-by-hop headers, including any named by ``Connection``.

    Repeated headers are kept in order.
    """
    headers = list(headers)
    connection_tokens = set()
    for key, value in headers:
        if key.lower() == "connection":
            connection_tokens |= {token.strip().lower() for token in value.split(",")}

    return [
        (key, value)
        for key, value in headers
        if key.lower() not in HOP_BY_HOP and key.lower() not in connection_tokens
    ]


def _has_body(request: Request) -> bool:
    return "content-length" in request.headers or "transfer-encoding" in request.headers


class DelegationForwarder:
    """Transparent relay to the local application server.

    Only the scheme and authority of the target change; the method, raw
    path, query, headers (Host included) and body are passed through.
    The httpx client is shared across requests and owned by the app.
    """

    def __init__(self, client: httpx.AsyncClient, delegate_url: str) -> None:
        """Initialize the forwarder.

        Args:
            client: Shared async HTTP client.
            delegate_url: Scheme and authority of the local server, e.g. ``http://localhost:3001``.
        """
        self._client = client
        self._delegate_url = delegate_url.rstrip("/")

    def target_url(self, request: Request) -> str:
        """Rewrite the request target to point at the delegate."""
        raw_path = request.scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else request_path(request)
        url = self._delegate_url + path
        if request.url.query:
            url += "?" + request.url.query
        return url

    async def forward(self, request: Request) -> Response:
        """Relay the request and stream the delegate's response back."""
        upstream_request = self._client.build_request(
            request.method,
            self.target_url(request),
            headers=filter_hop_by_hop(request.headers.items()),
            content=request.stream() if _has_body(request) else None,
        )

        try:
            upstream_response = await self._client.send(upstream_request, stream=True)
        except httpx.RequestError as e:
            logger.error("Delegate request %s %s failed: %s", request.method, request_path(request), e)
            return PlainTextResponse("Bad gateway", status_code=status.HTTP_502_BAD_GATEWAY)

        response = StreamingResponse(
            upstream_response.aiter_raw(),
            status_code=upstream_response.status_code,
            background=BackgroundTask(upstream_response.aclose),
        )
        response.raw_headers = [
            (key.encode("latin-1"), value.encode("latin-1"))
            for key, value in filter_hop_by_hop(upstream_response.headers.multi_items())
        ]
        return response
