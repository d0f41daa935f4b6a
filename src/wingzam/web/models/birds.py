"""Bird catalog API response models."""

from pydantic import BaseModel, Field

from wingzam.catalog.models import BirdRecord


class BirdListResponse(BaseModel):
    """Response containing the whole catalog."""

    birds: list[BirdRecord] = Field(..., description="All birds in catalog order")
    count: int = Field(..., description="Number of birds")


class BirdMatchResponse(BaseModel):
    """Response for a name lookup."""

    query: str = Field(..., description="Name as received")
    bird: BirdRecord = Field(..., description="Matched bird")
