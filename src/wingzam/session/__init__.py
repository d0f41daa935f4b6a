"""Listening session package.

This package contains the state machine that turns transcription events into
presentation state:
- SessionPhase, SessionState, SessionSnapshot: Session state and its read-only view
- SessionController: The listening/matching state machine
- AsyncioScheduler: Event-loop timers used by the controller
"""

from wingzam.session.controller import SessionClosedError, SessionController
from wingzam.session.models import SessionPhase, SessionSnapshot, SessionState
from wingzam.session.scheduler import AsyncioScheduler, Scheduler

__all__ = [
    "AsyncioScheduler",
    "Scheduler",
    "SessionClosedError",
    "SessionController",
    "SessionPhase",
    "SessionSnapshot",
    "SessionState",
]
