"""
Idle-session reaper.

The legacy HTTP API never removes sessions, so empty sessions that have
been idle past the threshold are swept periodically. Live sessions are
normally removed when their last member leaves and are only swept here if
somehow still present.
"""

import asyncio
import logging

from app.services.clock import now_ms
from app.services.store import SessionStore

logger = logging.getLogger(__name__)


class SessionReaper:
    """
    Periodically deletes empty, idle sessions.

    Features:
    - Snapshot-then-delete sweep (the store is never mutated mid-scan)
    - Emptiness re-checked right before each removal
    - Background task started/stopped with the application lifespan
    """

    def __init__(self, sessions: SessionStore, interval: int = 3600, idle_timeout: int = 3600):
        self.sessions = sessions
        # Configuration (seconds)
        self.interval = interval
        self.idle_timeout = idle_timeout
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        """Start the background sweep task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._sweep_loop())
            logger.info("Session reaper started (every %ss, idle after %ss)", self.interval, self.idle_timeout)

    async def stop(self) -> None:
        """Cancel the background sweep task."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session reaper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("Session sweep failed")

    def sweep(self, now: int | None = None) -> list[str]:
        """
        Remove sessions with no members and no activity within the threshold.

        Returns the ids that were removed.
        """
        now = now_ms() if now is None else now
        idle_ms = self.idle_timeout * 1000

        # Pass 1: mark
        marked = [session.id for session in self.sessions if session.is_idle(now, idle_ms)]

        # Pass 2: delete, skipping any session that gained a member meanwhile
        removed = []
        for session_id in marked:
            session = self.sessions.get(session_id)
            if session is None or not session.is_idle(now, idle_ms):
                continue
            self.sessions.remove(session_id)
            removed.append(session_id)

        if removed:
            logger.info("Reaped %d idle session(s)", len(removed))
        return removed
