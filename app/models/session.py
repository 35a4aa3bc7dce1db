"""
Session model for shared playback state.

A session is held only in process memory; the session store owns it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.services.clock import now_ms


class PlaybackState(str, Enum):
    """Play/pause state as sent on the wire."""

    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class Session:
    """
    Shared playback context joinable by several users.

    The true position at time t is
    last_known_time + (t - last_known_time_updated_at) while playing and
    last_known_time while paused. Clients do that arithmetic; the server
    only stores and relays the pair.
    """

    id: str
    video_id: int
    state: PlaybackState = PlaybackState.PAUSED
    last_known_time: int = 0
    last_known_time_updated_at: int = field(default_factory=now_ms)
    last_activity: int = field(default_factory=now_ms)
    # Ordered set of user ids (dict keys keep insertion order)
    member_ids: dict[str, None] = field(default_factory=dict)
    # Created by the legacy HTTP API; left to the reaper once empty
    legacy: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.member_ids

    def add_member(self, user_id: str) -> None:
        self.member_ids[user_id] = None

    def remove_member(self, user_id: str) -> None:
        self.member_ids.pop(user_id, None)

    def touch(self, at: int | None = None) -> None:
        """Refresh the idle watchdog."""
        self.last_activity = now_ms() if at is None else at

    def is_idle(self, now: int, idle_timeout_ms: int) -> bool:
        """Empty and untouched for longer than the idle threshold."""
        return self.is_empty and now - self.last_activity > idle_timeout_ms

    def playback_dict(self) -> dict[str, Any]:
        """Playback triple used by the live protocol."""
        return {
            "lastKnownTime": self.last_known_time,
            "lastKnownTimeUpdatedAt": self.last_known_time_updated_at,
            "state": self.state.value,
        }

    def to_record_dict(self) -> dict[str, Any]:
        """Full record returned by the legacy HTTP API."""
        return {
            "id": self.id,
            "lastActivity": self.last_activity,
            "lastKnownTime": self.last_known_time,
            "lastKnownTimeUpdatedAt": self.last_known_time_updated_at,
            "state": self.state.value,
            "videoId": self.video_id,
        }

    def __repr__(self) -> str:
        return f"<Session {self.id} video={self.video_id} {self.state.value} members={len(self.member_ids)}>"
