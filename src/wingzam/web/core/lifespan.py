"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wingzam.catalog.catalog import CatalogLoadError
from wingzam.system.structlog_configurator import configure_structlog
from wingzam.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Configures structured logging and loads the bird catalog before serving
    requests. A catalog that cannot be loaded aborts startup, since no session
    could ever succeed without it.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    try:
        catalog = container.catalog()
    except CatalogLoadError as e:
        logger.critical("Cannot start without a bird catalog: %s", e)
        raise

    if not container.speech_transcriber().is_available:
        logger.warning("No speech API key configured; server transcription is disabled")

    logger.info("Wingzam ready with %d birds", len(catalog))

    try:
        yield
    finally:
        logger.info("Shutting down Wingzam")
