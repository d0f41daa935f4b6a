"""Speech transcription package.

This package contains the transcription capability consumed by listening sessions:
- TranscriptEvent, CaptureFailed, CycleEnded: Generation-tagged session events
- TranscriptionSource, SpeechTranscriber: Live and server-side capabilities
- GoogleSpeechTranscriber: Server-side transcription via Google Cloud Speech
- ServerTranscriptionSource: Adapts a one-shot transcriber to a session event source
"""

from wingzam.transcription.base import (
    CaptureFailed,
    CaptureUnavailableError,
    CycleEnded,
    SessionEvent,
    SpeechTranscriber,
    TranscriptEvent,
    TranscriptionError,
    TranscriptionSource,
)
from wingzam.transcription.google_speech import GoogleSpeechTranscriber
from wingzam.transcription.server_source import ServerTranscriptionSource

__all__ = [
    "CaptureFailed",
    "CaptureUnavailableError",
    "CycleEnded",
    "GoogleSpeechTranscriber",
    "ServerTranscriptionSource",
    "SessionEvent",
    "SpeechTranscriber",
    "TranscriptEvent",
    "TranscriptionError",
    "TranscriptionSource",
]
