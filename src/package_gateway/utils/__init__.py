"""Utility helpers for the gateway."""

from starlette.requests import Request


def request_path(request: Request) -> str:
    """Return the decoded request path exactly as received.

    ``request.url.path`` is rebuilt from a URL string, so a decoded ``?``
    or ``#`` in the path (sent as ``%3F`` / ``%23``) would truncate it.
    """
    return request.scope["path"]


__all__ = ["request_path"]
