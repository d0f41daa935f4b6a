"""Session state models."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from wingzam.catalog.models import BirdRecord


class SessionPhase(str, Enum):
    """Phases of a listening session."""

    IDLE = "idle"
    LISTENING = "listening"
    RESOLVING = "resolving"
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Whether the phase ends a listening cycle."""
        return self in (SessionPhase.FOUND, SessionPhase.NOT_FOUND, SessionPhase.ERROR)


@dataclass
class SessionState:
    """Mutable state of one user session, owned by its SessionController."""

    phase: SessionPhase = SessionPhase.IDLE
    interim_text: str = ""
    resolved_bird: BirdRecord | None = None
    error_message: str | None = None
    still_listening: bool = False
    generation: int = 0

    def reset(self) -> None:
        """Clear everything a new cycle or a dismissal discards."""
        self.interim_text = ""
        self.resolved_bird = None
        self.error_message = None
        self.still_listening = False


class SessionSnapshot(BaseModel):
    """Read-only view of a session handed to the presentation layer."""

    phase: SessionPhase = Field(..., description="Current session phase")
    interim_text: str = Field("", description="Provisional transcript while listening")
    resolved_bird: BirdRecord | None = Field(None, description="Matched bird, when found")
    error_message: str | None = Field(None, description="Short user-facing failure message")
    still_listening: bool = Field(False, description="Listening for longer than expected")
    generation: int = Field(0, description="Listening cycle token")

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionSnapshot":
        """Capture the current values of a SessionState."""
        return cls(
            phase=state.phase,
            interim_text=state.interim_text,
            resolved_bird=state.resolved_bird,
            error_message=state.error_message,
            still_listening=state.still_listening,
            generation=state.generation,
        )
