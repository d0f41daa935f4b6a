"""Timer scheduling for session side effects."""

import asyncio
from collections.abc import Callable
from typing import Any, Protocol


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        """Prevent the callback from running."""
        ...


class Scheduler(Protocol):
    """Schedules callbacks after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Run callback(*args) after delay seconds."""
        ...


class AsyncioScheduler:
    """Schedules timers on an asyncio event loop.

    Without an explicit loop, the loop running at scheduling time is used, so a
    scheduler can be created before the loop starts.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> asyncio.TimerHandle:
        """Run callback(*args) after delay seconds on the event loop."""
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback, *args)
