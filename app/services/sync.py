"""
Playback synchronization: updateSession and ping.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from app.exceptions import NotInSessionError
from app.models.session import Session
from app.models.user import Connection, User
from app.schemas.session import PlaybackUpdate, parse_payload
from app.services.clock import now_ms
from app.services.store import SessionStore, UserRegistry

logger = logging.getLogger(__name__)

Notifier = Callable[[Iterable[Connection], dict[str, Any]], None]


class PlaybackSync:
    """
    Applies playback updates and fans them out to the other members.

    Updates are last-writer-wins: the timestamps come verbatim from the
    caller and are not ordered against earlier updates.
    """

    def __init__(self, sessions: SessionStore, users: UserRegistry, notify: Notifier):
        self.sessions = sessions
        self.users = users
        self.notify = notify

    def update_session(self, user: User, payload: Any) -> Session:
        if not user.in_session:
            raise NotInSessionError()

        update = parse_payload(PlaybackUpdate, payload)

        session = self.sessions.get(user.session_id)
        if session is None:
            # Session vanished underneath a stale membership
            user.session_id = None
            raise NotInSessionError()

        session.last_known_time = update.last_known_time
        session.last_known_time_updated_at = update.last_known_time_updated_at
        session.state = update.state
        session.touch()

        targets = self.users.connections_for(session.member_ids, exclude=user.id)
        logger.debug(
            "Session %s updated by %s: %s @ %s, notifying %d",
            session.id,
            user.id,
            update.state.value,
            update.last_known_time,
            len(targets),
        )
        self.notify(targets, {"type": "update", "data": session.playback_dict()})
        return session

    def ping(self) -> int:
        """Server wall-clock time for latency measurement."""
        return now_ms()
