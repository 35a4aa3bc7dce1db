"""
In-memory data models.
"""

from app.models.session import PlaybackState, Session
from app.models.user import Connection, User

__all__ = [
    "Connection",
    "PlaybackState",
    "Session",
    "User",
]
