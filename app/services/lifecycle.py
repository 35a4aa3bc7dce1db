"""
Session lifecycle: create, join, leave, reboot and disconnect.

Every operation validates its input completely before touching either
store, and runs without suspending, so each call is atomic on the event
loop.
"""

import logging
from typing import Any

from app.exceptions import AlreadyInSessionError, NotFoundError, NotInSessionError
from app.models.session import Session
from app.models.user import User
from app.schemas.session import CreateSessionRequest, RebootRequest, parse_payload
from app.services.store import SessionStore, UserRegistry

logger = logging.getLogger(__name__)


class SessionLifecycle:
    """
    Manages session membership against the session store and user registry.

    A session created over the live protocol is destroyed as soon as its
    last member leaves. Legacy sessions stay until the reaper removes them.
    """

    def __init__(self, sessions: SessionStore, users: UserRegistry):
        self.sessions = sessions
        self.users = users

    def create_session(self, user: User, video_id: Any) -> Session:
        """
        Create a paused session at position 0 with the caller as sole member.

        A caller already in a session leaves it first.
        """
        request = parse_payload(CreateSessionRequest, {"videoId": video_id})

        if user.in_session:
            self._detach(user)

        session = Session(id=self.sessions.new_id(), video_id=request.video_id)
        session.add_member(user.id)
        self.sessions.add(session)
        user.session_id = session.id

        logger.info("User %s created session %s", user.id, session.id)
        return session

    def join_session(self, user: User, session_id: Any) -> Session:
        """Add the caller to an existing session."""
        session = self.sessions.get(session_id) if isinstance(session_id, str) else None
        if session is None:
            raise NotFoundError("Session", session_id)

        if user.in_session:
            raise AlreadyInSessionError()

        session.add_member(user.id)
        session.touch()
        user.session_id = session.id

        logger.info("User %s joined session %s (%d members)", user.id, session.id, len(session.member_ids))
        return session

    def leave_session(self, user: User) -> None:
        """Remove the caller from its session."""
        if not user.in_session:
            raise NotInSessionError()

        self._detach(user)

    def reboot(self, user: User, payload: Any) -> Session:
        """
        Resume a session by id, or create it from the caller's state.

        If the session exists the caller joins it and the stored state wins;
        the offered playback fields are ignored. Otherwise a session is
        created from exactly the supplied fields.
        """
        request = parse_payload(RebootRequest, payload)

        if user.session_id == request.session_id and request.session_id in self.sessions:
            return self.sessions.get(request.session_id)

        if user.in_session:
            self._detach(user)

        session = self.sessions.get(request.session_id)
        if session is None:
            session = Session(
                id=request.session_id,
                video_id=request.video_id,
                state=request.state,
                last_known_time=request.last_known_time,
                last_known_time_updated_at=request.last_known_time_updated_at,
            )
            self.sessions.add(session)
            logger.info("User %s rebooted unknown session %s, recreated", user.id, session.id)
        else:
            session.touch()
            logger.info("User %s rebooted into existing session %s", user.id, session.id)

        session.add_member(user.id)
        user.session_id = session.id
        return session

    def disconnect(self, user: User) -> None:
        """Implicit leave followed by removal of the user record."""
        if user.in_session:
            self._detach(user)
        self.users.remove(user.id)

    def _detach(self, user: User) -> None:
        session_id = user.session_id
        user.session_id = None

        session = self.sessions.get(session_id)
        if session is None:
            return

        session.remove_member(user.id)
        logger.info("User %s left session %s (%d members)", user.id, session_id, len(session.member_ids))

        if session.is_empty and not session.legacy:
            self.sessions.remove(session_id)
