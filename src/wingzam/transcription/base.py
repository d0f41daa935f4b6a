"""Transcription capability contracts and the events they produce.

Every event carries the generation token of the listening cycle it belongs to, so a
session can tell a current capture's events from a superseded one's.
"""

from collections.abc import AsyncIterator
from typing import NamedTuple, Protocol


NO_TRANSCRIPTION_MESSAGE = "No transcription available."


class TranscriptionError(Exception):
    """Raised when a transcription attempt fails."""


class CaptureUnavailableError(TranscriptionError):
    """Raised when no transcription capability is available at all."""


class TranscriptEvent(NamedTuple):
    """A speech-to-text hypothesis.

    Partial events carry the full current hypothesis, not a delta.
    """

    generation: int
    text: str
    is_final: bool = False


class CaptureFailed(NamedTuple):
    """The capture signalled a hard failure."""

    generation: int
    reason: str


class CycleEnded(NamedTuple):
    """The capture finished producing events for this cycle."""

    generation: int


SessionEvent = TranscriptEvent | CaptureFailed | CycleEnded


class TranscriptionSource(Protocol):
    """Produces the events of one listening cycle."""

    def events(self, generation: int) -> AsyncIterator[SessionEvent]:
        """Yield events tagged with the given generation."""
        ...


class SpeechTranscriber(Protocol):
    """Turns a complete audio payload into a single transcript."""

    async def transcribe(self, audio: bytes) -> str:
        """Transcribe raw audio bytes.

        Raises:
            CaptureUnavailableError: If transcription is not configured
            TranscriptionError: If the transcription request fails
        """
        ...
