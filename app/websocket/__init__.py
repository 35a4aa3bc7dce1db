"""
WebSocket package for the live watch party protocol.

Provides:
- Connection management (one user record per connection)
- Event dispatch to the session services
- Fire-and-forget broadcast of playback updates
"""

from app.websocket.broadcast import notify_members
from app.websocket.handler import router
from app.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager", "notify_members", "router"]
