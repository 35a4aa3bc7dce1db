"""
WebSocket Endpoint Handler

Frames from the client are JSON text objects:
    {"id": <correlation>, "event": "<name>", "data": <payload>}

Each is answered with the same "id" plus "result" or "error". Binary
frames, invalid JSON and non-object frames are logged and ignored.
"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from app.websocket.manager import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for the live event protocol.
    """
    logger.info("WebSocket connection attempt from %s", websocket.client)
    manager: ConnectionManager = websocket.app.state.connections

    user = await manager.connect(websocket)
    if user is None:
        return

    try:
        while True:
            frame = await websocket.receive()

            if frame["type"] == "websocket.disconnect":
                logger.info("Disconnected: user %s, code=%s", user.id, frame.get("code", "N/A"))
                break

            data = frame.get("text")
            if data is None:
                logger.warning("Ignoring binary frame from user %s", user.id)
                continue

            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning("Invalid JSON from user %s", user.id)
                continue

            if not isinstance(message, dict):
                logger.warning("Ignoring non-object frame from user %s", user.id)
                continue

            reply = manager.handle_event(user, message.get("event"), message.get("data"))
            await websocket.send_json({"id": message.get("id"), **reply})

    except WebSocketDisconnect as e:
        logger.info("Disconnected: user %s, code=%s", user.id, getattr(e, "code", "N/A"))
    except Exception as e:
        logger.error("Error for user %s: %s", user.id, e)
    finally:
        manager.disconnect(user)
        await close_quietly(websocket)


async def close_quietly(websocket: WebSocket) -> None:
    """Close the socket unless either side already has."""
    if websocket.client_state != WebSocketState.CONNECTED:
        return
    if websocket.application_state != WebSocketState.CONNECTED:
        return
    try:
        await websocket.close()
    except RuntimeError as e:
        # "Cannot call send once close message has been sent"
        logger.debug("WebSocket already closed: %s", e)
