"""State machine for a voice lookup session.

Phases run ``IDLE -> LISTENING -> RESOLVING -> {FOUND, NOT_FOUND, ERROR} -> IDLE``.
``start`` is accepted from any phase: calling it while a result is displayed clears
the result and begins a new cycle directly, without passing through IDLE.

Each ``start`` issues a new generation token. Events carrying an older generation
come from a superseded capture and are dropped without touching the state.

Two timers run alongside the phases:

- still-listening: LISTENING for longer than ``still_listening_seconds`` without a
  final transcript raises ``still_listening``; any phase change lowers it.
- stale-interim: leftover interim text outside LISTENING is cleared after
  ``stale_interim_seconds``.
"""

import logging
from collections.abc import Callable

from wingzam.catalog.matcher import NameMatcher
from wingzam.session.models import SessionPhase, SessionSnapshot, SessionState
from wingzam.session.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from wingzam.transcription.base import (
    NO_TRANSCRIPTION_MESSAGE,
    CaptureFailed,
    CycleEnded,
    SessionEvent,
    TranscriptEvent,
    TranscriptionError,
    TranscriptionSource,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionSnapshot], None]


class SessionClosedError(Exception):
    """Raised when starting a cycle on a session that has been torn down."""


class SessionController:
    """Owns one session's state and applies transcription events to it."""

    def __init__(
        self,
        matcher: NameMatcher,
        scheduler: Scheduler | None = None,
        stale_interim_seconds: float = 5.0,
        still_listening_seconds: float = 5.0,
        state: SessionState | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            matcher: Name matcher bound to the bird catalog
            scheduler: Timer scheduler; defaults to the running asyncio loop
            stale_interim_seconds: Delay before leftover interim text is cleared
            still_listening_seconds: Delay before the still-listening notice is raised
            state: Session state to own; a fresh one is created if omitted
        """
        self.matcher = matcher
        self.scheduler = scheduler or AsyncioScheduler()
        self.stale_interim_seconds = stale_interim_seconds
        self.still_listening_seconds = still_listening_seconds
        self.state = state or SessionState()
        self.closed = False
        self._listeners: list[StateListener] = []
        self._still_listening_timer: TimerHandle | None = None
        self._stale_interim_timer: TimerHandle | None = None

    @property
    def generation(self) -> int:
        """Token of the current listening cycle."""
        return self.state.generation

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback receiving a snapshot after every state change."""
        self._listeners.append(listener)

    def snapshot(self) -> SessionSnapshot:
        """Get a read-only view of the current state."""
        return SessionSnapshot.from_state(self.state)

    # Transitions

    def start(self) -> int:
        """Begin a new listening cycle.

        Returns:
            The generation token events of this cycle must carry

        Raises:
            SessionClosedError: If the session has been closed
        """
        if self.closed:
            raise SessionClosedError("Cannot start listening on a closed session")

        self._cancel_timers()
        self.state.generation += 1
        self.state.reset()
        logger.debug("Listening cycle %d started", self.state.generation)
        self._set_phase(SessionPhase.LISTENING)
        return self.state.generation

    def partial_transcript(self, generation: int, text: str) -> bool:
        """Replace the interim text with the latest hypothesis."""
        if not self._accepts(generation):
            return False
        self.state.interim_text = text
        self._notify()
        return True

    def final_transcript(self, generation: int, text: str) -> bool:
        """Resolve a final transcript against the catalog."""
        if not self._accepts(generation):
            return False

        self.state.interim_text = ""
        self._set_phase(SessionPhase.RESOLVING)

        bird = self.matcher.match(text)
        if bird is not None:
            logger.info("Identified bird %s from %r", bird.common_name, text)
            self.state.resolved_bird = bird
            self._set_phase(SessionPhase.FOUND)
        else:
            query = text.strip().lower()
            logger.info("No bird matches %r", query)
            self.state.error_message = f'no bird "{query}"'
            self._set_phase(SessionPhase.NOT_FOUND)
        return True

    def capture_error(self, generation: int, reason: str) -> bool:
        """End the cycle because the capture failed or is unavailable."""
        if not self._accepts(generation):
            return False
        logger.warning("Capture failed in cycle %d: %s", generation, reason)
        self.state.error_message = reason
        self._set_phase(SessionPhase.ERROR)
        return True

    def end_of_cycle(self, generation: int) -> bool:
        """Handle the capture finishing.

        Ending while still listening means no final transcript ever arrived.
        """
        if not self._accepts(generation):
            return False
        return self.capture_error(generation, NO_TRANSCRIPTION_MESSAGE)

    def dismiss(self) -> None:
        """Dismiss a displayed result and return to IDLE."""
        if not self.state.phase.is_terminal:
            logger.debug("Ignoring dismiss in phase %s", self.state.phase.value)
            return
        self._cancel_timers()
        self.state.reset()
        self._set_phase(SessionPhase.IDLE)

    def close(self) -> None:
        """Tear the session down; pending timers are cancelled and late events ignored."""
        self._cancel_timers()
        self.closed = True
        self._listeners.clear()
        logger.debug("Session closed at generation %d", self.state.generation)

    # Event channel

    def handle(self, event: SessionEvent) -> bool:
        """Apply an event from a transcription source.

        Returns:
            True if the event changed the session, False if it was discarded
        """
        if isinstance(event, TranscriptEvent):
            if event.is_final:
                return self.final_transcript(event.generation, event.text)
            return self.partial_transcript(event.generation, event.text)
        if isinstance(event, CaptureFailed):
            return self.capture_error(event.generation, event.reason)
        if isinstance(event, CycleEnded):
            return self.end_of_cycle(event.generation)
        raise TypeError(f"Unsupported session event: {event!r}")

    async def run_cycle(self, source: TranscriptionSource) -> SessionSnapshot:
        """Run one complete listening cycle fed by a transcription source.

        Transcription failures raised by the source end the cycle in ERROR.

        Returns:
            The state at the end of the cycle
        """
        generation = self.start()
        try:
            async for event in source.events(generation):
                self.handle(event)
        except TranscriptionError as e:
            self.capture_error(generation, str(e))
        self.end_of_cycle(generation)
        return self.snapshot()

    # Internals

    def _accepts(self, generation: int) -> bool:
        if self.closed or generation != self.state.generation:
            logger.debug(
                "Discarding stale event for cycle %d (current %d)",
                generation,
                self.state.generation,
            )
            return False
        return self.state.phase is SessionPhase.LISTENING

    def _set_phase(self, phase: SessionPhase) -> None:
        self.state.phase = phase
        self.state.still_listening = False
        self._cancel_timer("_still_listening_timer")

        if phase is SessionPhase.LISTENING:
            self._cancel_timer("_stale_interim_timer")
            self._still_listening_timer = self.scheduler.call_later(
                self.still_listening_seconds, self._raise_still_listening, self.state.generation
            )
        elif self.state.interim_text:
            self._cancel_timer("_stale_interim_timer")
            self._stale_interim_timer = self.scheduler.call_later(
                self.stale_interim_seconds, self._clear_stale_interim, self.state.generation
            )

        self._notify()

    def _raise_still_listening(self, generation: int) -> None:
        self._still_listening_timer = None
        if generation != self.state.generation or self.state.phase is not SessionPhase.LISTENING:
            return
        self.state.still_listening = True
        self._notify()

    def _clear_stale_interim(self, generation: int) -> None:
        self._stale_interim_timer = None
        if generation != self.state.generation or self.state.phase is SessionPhase.LISTENING:
            return
        if self.state.interim_text:
            self.state.interim_text = ""
            self._notify()

    def _cancel_timer(self, name: str) -> None:
        timer = getattr(self, name)
        if timer is not None:
            timer.cancel()
            setattr(self, name, None)

    def _cancel_timers(self) -> None:
        self._cancel_timer("_still_listening_timer")
        self._cancel_timer("_stale_interim_timer")

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")
