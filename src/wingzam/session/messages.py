"""Wire messages of the live session channel.

The browser runs speech recognition itself and forwards its events as JSON messages:

- ``{"type": "start"}``
- ``{"type": "transcript", "generation": 3, "isFinal": false, "text": "blue"}``
- ``{"type": "error", "generation": 3, "reason": "not-allowed"}``
- ``{"type": "end", "generation": 3}``
- ``{"type": "dismiss"}``

The server answers every state change with ``{"type": "state", ...snapshot}`` and
rejects malformed messages with ``{"type": "error", "detail": ...}``.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from wingzam.session.controller import SessionController
from wingzam.session.models import SessionSnapshot
from wingzam.transcription.base import CaptureFailed, CycleEnded, TranscriptEvent


class StartMessage(BaseModel):
    """Begin a new listening cycle."""

    type: Literal["start"]


class TranscriptMessage(BaseModel):
    """An interim or final recognition result."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["transcript"]
    generation: int
    text: str
    is_final: bool = Field(default=False, alias="isFinal")


class CaptureErrorMessage(BaseModel):
    """The browser's recognizer failed or is unavailable."""

    type: Literal["error"]
    generation: int
    reason: str = "Speech recognition is unavailable."


class EndMessage(BaseModel):
    """The browser's recognizer stopped."""

    type: Literal["end"]
    generation: int


class DismissMessage(BaseModel):
    """Close the displayed result."""

    type: Literal["dismiss"]


ClientMessage = Annotated[
    StartMessage | TranscriptMessage | CaptureErrorMessage | EndMessage | DismissMessage,
    Field(discriminator="type"),
]

_client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


def parse_client_message(payload: Any) -> ClientMessage:
    """Validate a decoded JSON payload into a client message.

    Raises:
        pydantic.ValidationError: If the payload is not a known message
    """
    return _client_message_adapter.validate_python(payload)


def apply_client_message(controller: SessionController, message: ClientMessage) -> None:
    """Feed a client message into the session controller."""
    if isinstance(message, StartMessage):
        controller.start()
    elif isinstance(message, TranscriptMessage):
        controller.handle(TranscriptEvent(message.generation, message.text, message.is_final))
    elif isinstance(message, CaptureErrorMessage):
        controller.handle(CaptureFailed(message.generation, message.reason))
    elif isinstance(message, EndMessage):
        controller.handle(CycleEnded(message.generation))
    elif isinstance(message, DismissMessage):
        controller.dismiss()


def state_message(snapshot: SessionSnapshot) -> dict[str, Any]:
    """Serialize a snapshot for the session channel."""
    return {"type": "state", **snapshot.model_dump(mode="json")}


def error_message(detail: str) -> dict[str, Any]:
    """Build a protocol error reply."""
    return {"type": "error", "detail": detail}
