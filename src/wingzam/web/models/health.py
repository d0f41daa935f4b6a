"""Probe responses for the health endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class CatalogCheck(BaseModel):
    """State of the bird catalog as seen by the readiness probe."""

    status: Literal["healthy", "unhealthy"]
    error: str | None = None


class HealthCheckResponse(BaseModel):
    """Identity and liveness of the running service."""

    status: Literal["healthy"] = "healthy"
    service: str = Field("wingzam", description="Service identifier for log correlation")
    version: str = Field(..., description="Installed wingzam version")
    timestamp: str = Field(..., description="UTC time of the check, ISO 8601 with Z suffix")


class LivenessProbeResponse(BaseModel):
    """The process is up and serving requests."""

    status: Literal["alive"] = "alive"


class ReadinessProbeResponse(BaseModel):
    """Whether sessions can be served, which requires a non-empty catalog."""

    status: Literal["ready", "not_ready"]
    checks: dict[str, CatalogCheck] = Field(..., description="Per-dependency results")
    catalog_records: int = Field(0, description="Birds available for matching")
    timestamp: str = Field(..., description="UTC time of the check, ISO 8601 with Z suffix")
