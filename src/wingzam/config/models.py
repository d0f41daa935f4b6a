"""Configuration models for Wingzam.

This module contains all configuration-related Pydantic models used throughout the application.
"""

import re

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "wingzam"})


class SessionConfig(BaseModel):
    """Listening session timing configuration."""

    stale_interim_seconds: float = Field(default=5.0, gt=0)  # Clear leftover interim text
    still_listening_seconds: float = Field(default=5.0, gt=0)  # Raise "still listening" notice


class SpeechConfig(BaseModel):
    """Server-side speech transcription configuration."""

    api_key: str = ""  # Google Cloud Speech API key; empty disables server transcription
    endpoint: str = "https://speech.googleapis.com/v1/speech:recognize"
    language_code: str = "en-US"
    encoding: str = "WEBM_OPUS"
    sample_rate_hertz: int = 48000
    timeout: float = 10.0

    @field_validator("language_code")
    @classmethod
    def validate_language_code(cls, v: str) -> str:
        """Validate BCP-47 style language code format."""
        if not re.match(r"^[a-zA-Z]{2,3}(-[a-zA-Z0-9]{2,8})*$", v):
            raise ValueError(f"Invalid language code '{v}'. Expected a BCP-47 tag like 'en-US'.")
        return v


class RecordingsConfig(BaseModel):
    """Third-party recordings API configuration."""

    api_url: str = "https://xeno-canto.org/api/2/recordings"
    timeout: float = 10.0


class WingzamConfig(BaseModel):
    """Configuration settings for the Wingzam application."""

    site_name: str = "Wingzam"

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Session state machine timers
    session: SessionConfig = Field(default_factory=SessionConfig)

    # Server transcription
    speech: SpeechConfig = Field(default_factory=SpeechConfig)

    # Recordings lookup
    recordings: RecordingsConfig = Field(default_factory=RecordingsConfig)
