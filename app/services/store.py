"""
In-memory repositories for sessions and connected users.

These two objects are the single source of truth for membership and
playback state. They are created once per application (see main.py) and
passed explicitly to the services that use them.
"""

import logging
from collections.abc import Iterator

from app.models.session import Session
from app.models.user import Connection, User
from app.services.identifiers import generate_id

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps session id -> Session."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def new_id(self) -> str:
        """Generate an id not used by any live session."""
        session_id = generate_id()
        while session_id in self._sessions:
            session_id = generate_id()
        return session_id

    def add(self, session: Session) -> Session:
        if session.id in self._sessions:
            raise KeyError(f"Session {session.id} already exists")
        self._sessions[session.id] = session
        logger.info("Session created: %s (video %s)", session.id, session.video_id)
        return session

    def remove(self, session_id: str) -> Session | None:
        session = self._sessions.pop(session_id, None)
        if session:
            logger.info("Session destroyed: %s", session_id)
        return session

    def ids(self) -> list[str]:
        """Snapshot of current session ids."""
        return list(self._sessions.keys())


class UserRegistry:
    """Maps user id -> User for live connections."""

    def __init__(self):
        self._users: dict[str, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def register(self, connection: Connection) -> User:
        """Allocate a user with a fresh id for a new connection."""
        user_id = generate_id()
        while user_id in self._users:
            user_id = generate_id()
        user = User(id=user_id, connection=connection)
        self._users[user_id] = user
        logger.debug("User registered: %s (%d connected)", user_id, len(self._users))
        return user

    def remove(self, user_id: str) -> User | None:
        user = self._users.pop(user_id, None)
        logger.debug("User removed: %s (%d connected)", user_id, len(self._users))
        return user

    def connections_for(self, user_ids, exclude: str | None = None) -> list[Connection]:
        """Connections of the given users, skipping `exclude` and unknown ids."""
        connections = []
        for user_id in user_ids:
            if user_id == exclude:
                continue
            user = self._users.get(user_id)
            if user is not None:
                connections.append(user.connection)
        return connections
