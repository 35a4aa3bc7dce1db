"""
Fire-and-forget delivery of server pushes to other members.

Usage in services:
    from app.websocket.broadcast import notify_members

    notify_members(connections, {"type": "update", "data": {...}})

Each delivery runs as its own task: the caller never waits for it, a slow
or failed connection does not affect the others, and nothing is retried.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from app.models.user import Connection

logger = logging.getLogger(__name__)

# Strong references so pending deliveries are not garbage collected
_pending: set[asyncio.Task] = set()


def notify_members(connections: Iterable[Connection], message: dict[str, Any]) -> None:
    """
    Schedule `message` for delivery to every connection without awaiting.

    Must be called from a running event loop.
    """
    targets = list(connections)
    logger.debug("Broadcasting %s to %d connection(s)", message.get("type"), len(targets))

    for connection in targets:
        task = asyncio.create_task(_deliver(connection, message))
        _pending.add(task)
        task.add_done_callback(_pending.discard)


async def _deliver(connection: Connection, message: dict[str, Any]) -> None:
    """Send one message, with safety check."""
    try:
        # Starlette WebSockets expose their state; other transports may not
        state = getattr(connection, "client_state", None)
        if state is not None and state.name != "CONNECTED":
            logger.debug("Cannot send - WebSocket not connected (state: %s)", state.name)
            return
        await connection.send_json(message)
    except RuntimeError as e:
        # "Cannot call send once close message has been sent"
        logger.debug("WebSocket already closed: %s", e)
    except Exception as e:
        logger.warning("Failed to deliver %s: %s", message.get("type"), e)
