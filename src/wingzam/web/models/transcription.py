"""Transcription API request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class AudioPayload(BaseModel):
    """A recorded clip sent by the browser."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "audioData": "GkXfo59ChoEBQveBAULygQRC...",
                "mimeType": "audio/webm; codecs=opus",
            }
        },
    )

    audio_data: str = Field("", alias="audioData", description="Base64-encoded audio")
    mime_type: str | None = Field(None, alias="mimeType", description="Recorder MIME type")


class TranscriptResponse(BaseModel):
    """Result of a server-side transcription."""

    transcript: str = Field(..., description="Recognized text")
