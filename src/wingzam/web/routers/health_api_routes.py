"""Health check endpoints for monitoring service status."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from wingzam import __version__
from wingzam.catalog.catalog import BirdCatalog
from wingzam.web.core.container import Container
from wingzam.web.models.health import (
    CatalogCheck,
    HealthCheckResponse,
    LivenessProbeResponse,
    ReadinessProbeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Check basic health status of the service."""
    return HealthCheckResponse(version=__version__, timestamp=_timestamp())


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Kubernetes-style liveness probe."""
    return LivenessProbeResponse()


@router.get("/ready", response_model=ReadinessProbeResponse)
@inject
async def readiness_probe(
    catalog: Annotated[BirdCatalog, Depends(Provide[Container.catalog])],
    response: Response,
) -> ReadinessProbeResponse:
    """Kubernetes-style readiness probe.

    The service is ready once the bird catalog holds at least one bird.
    """
    if len(catalog) == 0:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessProbeResponse(
            status="not_ready",
            checks={"catalog": CatalogCheck(status="unhealthy", error="Catalog is empty")},
            timestamp=_timestamp(),
        )

    return ReadinessProbeResponse(
        status="ready",
        checks={"catalog": CatalogCheck(status="healthy")},
        timestamp=_timestamp(),
        catalog_records=len(catalog),
    )
