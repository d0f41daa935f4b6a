"""Tests for session channel messages."""

import pytest
from pydantic import ValidationError

from wingzam.session.controller import SessionController
from wingzam.session.messages import (
    CaptureErrorMessage,
    DismissMessage,
    EndMessage,
    StartMessage,
    TranscriptMessage,
    apply_client_message,
    error_message,
    parse_client_message,
    state_message,
)
from wingzam.session.models import SessionPhase


@pytest.fixture
def controller(name_matcher, scheduler):
    """Create a SessionController driven by the fake scheduler."""
    return SessionController(name_matcher, scheduler=scheduler)


class TestParseClientMessage:
    """Test validation of incoming messages."""

    @pytest.mark.parametrize(
        "payload,expected_type",
        [
            pytest.param({"type": "start"}, StartMessage, id="start"),
            pytest.param(
                {"type": "transcript", "generation": 1, "text": "blue", "isFinal": True},
                TranscriptMessage,
                id="transcript",
            ),
            pytest.param({"type": "error", "generation": 1}, CaptureErrorMessage, id="error"),
            pytest.param({"type": "end", "generation": 1}, EndMessage, id="end"),
            pytest.param({"type": "dismiss"}, DismissMessage, id="dismiss"),
        ],
    )
    def test_known_messages(self, payload, expected_type):
        """Should pick the message model from the type field."""
        assert isinstance(parse_client_message(payload), expected_type)

    def test_transcript_fields(self):
        """Should read the camelCase final flag and default it to interim."""
        final = parse_client_message(
            {"type": "transcript", "generation": 2, "text": "blue jay", "isFinal": True}
        )
        interim = parse_client_message({"type": "transcript", "generation": 2, "text": "blue"})

        assert final.is_final is True
        assert final.generation == 2
        assert interim.is_final is False

    def test_error_default_reason(self):
        """Should supply a reason when the browser gives none."""
        message = parse_client_message({"type": "error", "generation": 1})
        assert message.reason == "Speech recognition is unavailable."

    @pytest.mark.parametrize(
        "payload",
        [
            pytest.param({"type": "listen"}, id="unknown_type"),
            pytest.param({"generation": 1}, id="missing_type"),
            pytest.param({"type": "transcript", "text": "blue"}, id="missing_generation"),
            pytest.param({"type": "end", "generation": "latest"}, id="bad_generation"),
            pytest.param(["start"], id="not_an_object"),
        ],
    )
    def test_malformed_messages(self, payload):
        """Should reject payloads that are not valid messages."""
        with pytest.raises(ValidationError):
            parse_client_message(payload)


class TestApplyClientMessage:
    """Test feeding messages into a controller."""

    def test_full_cycle(self, controller):
        """Should drive a controller from start to dismissal."""
        apply_client_message(controller, StartMessage(type="start"))
        generation = controller.generation
        apply_client_message(
            controller, TranscriptMessage(type="transcript", generation=generation, text="blue")
        )
        assert controller.snapshot().interim_text == "blue"

        apply_client_message(
            controller,
            TranscriptMessage(
                type="transcript", generation=generation, text="northern cardinal", is_final=True
            ),
        )
        assert controller.snapshot().resolved_bird.common_name == "Northern Cardinal"

        apply_client_message(controller, DismissMessage(type="dismiss"))
        assert controller.snapshot().phase is SessionPhase.IDLE

    def test_error_message(self, controller):
        """Should fail the cycle with the browser's reason."""
        apply_client_message(controller, StartMessage(type="start"))
        apply_client_message(
            controller,
            CaptureErrorMessage(type="error", generation=controller.generation, reason="no-speech"),
        )

        snapshot = controller.snapshot()
        assert snapshot.phase is SessionPhase.ERROR
        assert snapshot.error_message == "no-speech"

    def test_end_message(self, controller):
        """Should end a cycle still waiting for a transcript."""
        apply_client_message(controller, StartMessage(type="start"))
        apply_client_message(controller, EndMessage(type="end", generation=controller.generation))

        assert controller.snapshot().phase is SessionPhase.ERROR

    def test_stale_message(self, controller):
        """Should ignore messages from a superseded cycle."""
        apply_client_message(controller, StartMessage(type="start"))
        apply_client_message(controller, StartMessage(type="start"))
        apply_client_message(
            controller,
            TranscriptMessage(type="transcript", generation=1, text="blue jay", is_final=True),
        )

        assert controller.snapshot().phase is SessionPhase.LISTENING


class TestReplies:
    """Test server replies."""

    def test_state_message(self, controller):
        """Should serialize the snapshot as JSON-ready data."""
        generation = controller.start()
        controller.final_transcript(generation, "blue jay")

        message = state_message(controller.snapshot())

        assert message["type"] == "state"
        assert message["phase"] == "found"
        assert message["generation"] == generation
        assert message["resolved_bird"]["common_name"] == "Blue Jay"
        assert message["resolved_bird"]["aliases"] == ["blue jay", "blue-jay"]

    def test_idle_state_message(self, controller):
        """Should serialize an empty session."""
        assert state_message(controller.snapshot()) == {
            "type": "state",
            "phase": "idle",
            "interim_text": "",
            "resolved_bird": None,
            "error_message": None,
            "still_listening": False,
            "generation": 0,
        }

    def test_error_reply(self):
        """Should wrap protocol errors."""
        assert error_message("Malformed session message") == {
            "type": "error",
            "detail": "Malformed session message",
        }
