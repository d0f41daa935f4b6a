"""Application factory for the Wingzam web service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wingzam import __version__
from wingzam.web.core.container import Container
from wingzam.web.core.lifespan import lifespan
from wingzam.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from wingzam.web.routers import (
    birds_api_routes,
    health_api_routes,
    recordings_api_routes,
    transcription_api_routes,
    websocket_routes,
)


def create_app() -> FastAPI:
    """Assemble the API, its container and the session WebSocket.

    Each call builds and wires a fresh Container, exposed as ``app.container``
    so callers can override its providers.
    """
    container = Container()

    app = FastAPI(
        lifespan=lifespan,
        title="Wingzam API",
        description="Speak a bird's name to hear its song and see where it was recorded",
        version=__version__,
    )
    app.container = container  # type: ignore[attr-defined]

    # Browser front-end may be served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # nosemgrep
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "wingzam.web.routers.birds_api_routes",
            "wingzam.web.routers.health_api_routes",
            "wingzam.web.routers.recordings_api_routes",
            "wingzam.web.routers.transcription_api_routes",
            "wingzam.web.routers.websocket_routes",
        ]
    )

    # === API Routes ===

    app.include_router(birds_api_routes.router, prefix="/api", tags=["Birds API"])
    app.include_router(transcription_api_routes.router, prefix="/api", tags=["Transcription API"])
    app.include_router(recordings_api_routes.router, prefix="/api", tags=["Recordings API"])
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    # Real-time listening sessions
    app.include_router(websocket_routes.router, prefix="/ws", tags=["WebSocket"])

    return app
