"""Recordings lookup API routes."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from wingzam.catalog.models import RecordingRef
from wingzam.recordings.xeno_canto import RecordingsLookupError, XenoCantoClient
from wingzam.web.core.container import Container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recordings")


@router.get("")
@inject
async def search_recordings(
    recordings_client: Annotated[XenoCantoClient, Depends(Provide[Container.recordings_client])],
    query: str | None = Query(None, description="Bird name to search for"),
) -> dict:
    """Proxy a recordings search to xeno-canto and return its raw response."""
    if not query or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Query parameter is required."
        )
    try:
        return await recordings_client.search(query)
    except RecordingsLookupError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        ) from e


@router.get("/find", response_model=RecordingRef)
@inject
async def find_recording(
    recordings_client: Annotated[XenoCantoClient, Depends(Provide[Container.recordings_client])],
    name: str = Query(..., min_length=1, description="Bird name to find a recording for"),
) -> RecordingRef:
    """Get the recording of a uniquely identified bird."""
    try:
        recording = await recordings_client.find_recording(name)
    except RecordingsLookupError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        ) from e
    if recording is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Could not uniquely identify the bird.",
        )
    return recording
