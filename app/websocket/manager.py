"""
WebSocket Connection Manager

Manages live connections for the watch party protocol:
- Allocates a user record per connection and pushes its id
- Dispatches client events to the lifecycle and sync services
- Implicit leave and user removal on disconnect
"""

import logging
from typing import Any

from fastapi import WebSocket

from app.exceptions import AppError
from app.models.user import User
from app.services.lifecycle import SessionLifecycle
from app.services.store import UserRegistry
from app.services.sync import PlaybackSync

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Bridges WebSocket connections to the session services.

    Every client event is answered on the same connection with either
    {"result": ...} or {"error": {"errorMessage": ...}}.
    """

    def __init__(self, users: UserRegistry, lifecycle: SessionLifecycle, sync: PlaybackSync):
        self.users = users
        self.lifecycle = lifecycle
        self.sync = sync
        self._handlers = {
            "reboot": self._on_reboot,
            "createSession": self._on_create_session,
            "joinSession": self._on_join_session,
            "leaveSession": self._on_leave_session,
            "updateSession": self._on_update_session,
            "ping": self._on_ping,
        }
        logger.info("WebSocket Manager initialized")

    async def connect(self, websocket: WebSocket) -> User | None:
        """
        Accept a new WebSocket connection and push the new user id.

        Returns None if the connection died before registration completed.
        """
        await websocket.accept()
        user = self.users.register(websocket)

        try:
            await websocket.send_json({"type": "userId", "data": {"userId": user.id}})
        except Exception as e:
            logger.error("Failed to send user id to %s: %s", user.id, e)
            self.disconnect(user)
            return None

        logger.info("WebSocket connected: user=%s (%d online)", user.id, len(self.users))
        return user

    def disconnect(self, user: User) -> None:
        """Handle WebSocket disconnection."""
        self.lifecycle.disconnect(user)
        logger.info("WebSocket disconnected: user=%s (%d online)", user.id, len(self.users))

    def handle_event(self, user: User, event: Any, data: Any) -> dict[str, Any]:
        """
        Run one client event and build its reply.

        Errors are returned to the caller, never raised into the receive loop.
        """
        handler = self._handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            logger.warning("Unknown event from user %s: %r", user.id, event)
            return {"error": {"errorMessage": f"Unknown event: {event}."}}

        logger.debug("Event %s from user %s", event, user.id)
        try:
            return {"result": handler(user, data)}
        except AppError as e:
            logger.debug("Event %s from user %s rejected: %s", event, user.id, e.message)
            return {"error": {"errorMessage": e.message}}

    def _on_reboot(self, user: User, data: Any) -> dict[str, Any]:
        session = self.lifecycle.reboot(user, data)
        return session.playback_dict()

    def _on_create_session(self, user: User, data: Any) -> dict[str, Any]:
        session = self.lifecycle.create_session(user, data)
        return {"sessionId": session.id, **session.playback_dict()}

    def _on_join_session(self, user: User, data: Any) -> dict[str, Any]:
        session = self.lifecycle.join_session(user, data)
        return {"videoId": session.video_id, **session.playback_dict()}

    def _on_leave_session(self, user: User, data: Any) -> None:
        self.lifecycle.leave_session(user)

    def _on_update_session(self, user: User, data: Any) -> None:
        self.sync.update_session(user, data)

    def _on_ping(self, user: User, data: Any) -> int:
        return self.sync.ping()
