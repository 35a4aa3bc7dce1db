"""
User model for a live connection.
"""

from dataclasses import dataclass
from typing import Any, Protocol


class Connection(Protocol):
    """Transport handle used to push events to one client."""

    async def send_json(self, data: Any) -> None: ...


@dataclass
class User:
    """Represents a connected user. Owns its transport handle."""

    id: str
    connection: Connection
    session_id: str | None = None

    @property
    def in_session(self) -> bool:
        return self.session_id is not None
