"""FastAPI application.

The gateway exposes no routes of its own: a single catch-all route hands
every request, whatever its method or path, to the dispatcher.
"""

from fastapi import FastAPI, Request
from fastapi.responses import Response

from package_gateway.config import configure_logging, settings

from .dependencies import get_dispatcher, lifespan


async def gateway(request: Request) -> Response:
    """Dispatch any request; registered without a method filter."""
    dispatcher = get_dispatcher(request)
    return await dispatcher.dispatch(request)


def create_app(lifespan=lifespan) -> FastAPI:
    """Create the gateway application.

    Args:
        lifespan: Startup/shutdown context. Tests pass None and set
            ``app.state.dispatcher`` themselves.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Package Gateway",
        description="Package registry gateway with legacy traffic migration",
        version="0.1.0",
        lifespan=lifespan,
        # Every path belongs to the registry surface
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # A plain route with methods=None matches every HTTP method,
    # including WebDAV and custom verbs the delegate may serve.
    app.add_route("/{path:path}", gateway, include_in_schema=False)

    return app


app = create_app()


def main() -> None:
    """Run the gateway with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "package_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
