"""Server-side transcription API routes."""

import base64
import binascii
import logging
from collections.abc import Callable
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from wingzam.session.controller import SessionController
from wingzam.session.models import SessionSnapshot
from wingzam.transcription.base import CaptureUnavailableError, TranscriptionError
from wingzam.transcription.google_speech import GoogleSpeechTranscriber
from wingzam.transcription.server_source import ServerTranscriptionSource
from wingzam.web.core.container import Container
from wingzam.web.models.transcription import AudioPayload, TranscriptResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def decode_audio(payload: AudioPayload) -> bytes:
    """Decode the base64 audio of a request.

    Raises:
        HTTPException: 400 if the audio is missing or not valid base64
    """
    if not payload.audio_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No audio data received."
        )
    try:
        audio = base64.b64decode(payload.audio_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Audio data is not valid base64."
        ) from e
    if not audio:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No audio data received."
        )
    return audio


@router.post("/transcribe", response_model=TranscriptResponse)
@inject
async def transcribe_audio(
    payload: AudioPayload,
    transcriber: Annotated[
        GoogleSpeechTranscriber, Depends(Provide[Container.speech_transcriber])
    ],
) -> TranscriptResponse:
    """Transcribe a recorded clip.

    Raises:
        HTTPException: 400 for missing audio, 503 when transcription is not
            configured, 500 when the transcription request fails
    """
    audio = decode_audio(payload)
    logger.info("Transcribing clip", extra={"bytes": len(audio), "mime_type": payload.mime_type})
    try:
        transcript = await transcriber.transcribe(audio)
    except CaptureUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except TranscriptionError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Transcription failed."
        ) from e
    return TranscriptResponse(transcript=transcript)


@router.post("/identify", response_model=SessionSnapshot)
@inject
async def identify_bird(
    payload: AudioPayload,
    transcriber: Annotated[
        GoogleSpeechTranscriber, Depends(Provide[Container.speech_transcriber])
    ],
    session_factory: Annotated[
        Callable[[], SessionController], Depends(Provide[Container.session_controller.provider])
    ],
) -> SessionSnapshot:
    """Run a full listening cycle on a recorded clip and return the resulting session state.

    Failures to transcribe are reported in the snapshot (phase ``error``), not as HTTP errors.
    """
    audio = decode_audio(payload)
    controller = session_factory()
    try:
        return await controller.run_cycle(ServerTranscriptionSource(transcriber, audio))
    finally:
        controller.close()
