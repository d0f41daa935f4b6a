"""Bird catalog API routes."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from wingzam.catalog.catalog import BirdCatalog
from wingzam.catalog.matcher import NameMatcher
from wingzam.catalog.models import BirdRecord
from wingzam.web.core.container import Container
from wingzam.web.models.birds import BirdListResponse, BirdMatchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/birds")


@router.get("", response_model=BirdListResponse)
@inject
async def list_birds(
    catalog: Annotated[BirdCatalog, Depends(Provide[Container.catalog])],
) -> BirdListResponse:
    """Get every bird in the catalog, in catalog order."""
    return BirdListResponse(birds=list(catalog), count=len(catalog))


@router.get("/match", response_model=BirdMatchResponse)
@inject
async def match_bird(
    name_matcher: Annotated[NameMatcher, Depends(Provide[Container.name_matcher])],
    name: str = Query(..., description="Spoken or typed common name"),
) -> BirdMatchResponse:
    """Resolve a name to a bird using the same matching as voice sessions.

    Raises:
        HTTPException: 404 with ``no bird "<name>"`` when nothing matches
    """
    bird = name_matcher.match(name)
    if bird is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'no bird "{name.strip().lower()}"',
        )
    return BirdMatchResponse(query=name, bird=bird)


@router.get("/{bird_id}", response_model=BirdRecord)
@inject
async def get_bird(
    bird_id: str,
    catalog: Annotated[BirdCatalog, Depends(Provide[Container.catalog])],
) -> BirdRecord:
    """Get a single bird by its catalog id."""
    bird = catalog.get(bird_id)
    if bird is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Bird {bird_id} not found",
        )
    return bird
