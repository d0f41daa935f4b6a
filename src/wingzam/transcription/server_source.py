"""Session event source backed by a one-shot server transcription."""

import logging
from collections.abc import AsyncIterator

from wingzam.transcription.base import (
    NO_TRANSCRIPTION_MESSAGE,
    CaptureFailed,
    CaptureUnavailableError,
    CycleEnded,
    SessionEvent,
    SpeechTranscriber,
    TranscriptEvent,
    TranscriptionError,
)

logger = logging.getLogger(__name__)


class ServerTranscriptionSource:
    """Presents a recorded clip as a listening cycle with a single final transcript."""

    def __init__(self, transcriber: SpeechTranscriber, audio: bytes) -> None:
        self.transcriber = transcriber
        self.audio = audio

    async def events(self, generation: int) -> AsyncIterator[SessionEvent]:
        """Yield one final transcript, or a capture failure, then the end of the cycle."""
        try:
            transcript = await self.transcriber.transcribe(self.audio)
        except CaptureUnavailableError as e:
            yield CaptureFailed(generation, str(e))
        except TranscriptionError as e:
            logger.warning("Server transcription failed: %s", e)
            yield CaptureFailed(generation, "Failed to transcribe audio.")
        else:
            if transcript.strip():
                yield TranscriptEvent(generation, transcript, is_final=True)
            else:
                yield CaptureFailed(generation, NO_TRANSCRIPTION_MESSAGE)
        yield CycleEnded(generation)
