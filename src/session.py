# ABOUTME: Stopwatch-style exposure session timer driven by an asyncio tick task.
# ABOUTME: The tick task exists only while the session is running and is cancelled on every exit path.

import asyncio
import logging

from src.models import SessionPhase

logger = logging.getLogger(__name__)


class SessionTimer:
    """Start/stop/reset state machine that counts whole seconds while running.

    States are Idle (inactive, zero seconds), Running and Stopped (inactive, frozen
    seconds). `tick()` advances the counter; while running, a background task calls it
    once per `interval` seconds. Tests drive `tick()` directly.
    """

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self.active = False
        self.elapsed_seconds = 0
        self._task: asyncio.Task | None = None

    @property
    def phase(self) -> SessionPhase:
        if self.active:
            return SessionPhase.RUNNING
        if self.elapsed_seconds > 0:
            return SessionPhase.STOPPED
        return SessionPhase.IDLE

    def start(self) -> bool:
        """Begin a fresh session. Returns False without changes if one is already running."""
        if self.active:
            return False
        loop = asyncio.get_running_loop()
        self.elapsed_seconds = 0
        self.active = True
        self._task = loop.create_task(self._run())
        logger.debug("Session started")
        return True

    def tick(self) -> None:
        if self.active:
            self.elapsed_seconds += 1

    def stop(self) -> int | None:
        """Freeze the session and return its elapsed seconds, or None if it was not running."""
        if not self.active:
            return None
        self.active = False
        self._cancel_task()
        logger.debug("Session stopped after %d seconds", self.elapsed_seconds)
        return self.elapsed_seconds

    def reset(self) -> None:
        """Return to Idle from any state, discarding the session."""
        self.active = False
        self.elapsed_seconds = 0
        self._cancel_task()

    def close(self) -> None:
        """Release the tick task on teardown."""
        self.active = False
        self._cancel_task()

    async def _run(self) -> None:
        while self.active:
            await asyncio.sleep(self.interval)
            self.tick()

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
