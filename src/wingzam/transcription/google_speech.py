"""Server-side transcription through the Google Cloud Speech REST API."""

import base64
import logging

import httpx

from wingzam.config.models import SpeechConfig
from wingzam.transcription.base import CaptureUnavailableError, TranscriptionError

logger = logging.getLogger(__name__)


class GoogleSpeechTranscriber:
    """Transcribes short recorded clips with Google Cloud Speech ``speech:recognize``."""

    def __init__(self, config: SpeechConfig) -> None:
        self.config = config

    @property
    def is_available(self) -> bool:
        """Whether an API key has been configured."""
        return bool(self.config.api_key)

    def build_request(self, audio: bytes) -> dict:
        """Build the recognize request body for an audio payload."""
        return {
            "config": {
                "encoding": self.config.encoding,
                "sampleRateHertz": self.config.sample_rate_hertz,
                "languageCode": self.config.language_code,
            },
            "audio": {"content": base64.b64encode(audio).decode("ascii")},
        }

    async def transcribe(self, audio: bytes) -> str:
        """Transcribe a complete audio clip.

        Args:
            audio: Raw encoded audio (WebM/Opus by default)

        Returns:
            The first alternative of each recognized segment, joined by newlines.
            Empty when nothing was recognized.

        Raises:
            CaptureUnavailableError: If no API key is configured
            TranscriptionError: If the request fails or the response is malformed
        """
        if not self.is_available:
            raise CaptureUnavailableError("Speech transcription is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await client.post(
                    self.config.endpoint,
                    params={"key": self.config.api_key},
                    json=self.build_request(audio),
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Speech transcription request failed", extra={"error": str(e)})
            raise TranscriptionError("Transcription failed.") from e

        try:
            transcripts = [
                result["alternatives"][0]["transcript"] for result in data.get("results", [])
            ]
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            raise TranscriptionError("Unexpected transcription response") from e

        transcript = "\n".join(transcripts)
        logger.info("Transcribed audio clip", extra={"segments": len(transcripts)})
        return transcript
