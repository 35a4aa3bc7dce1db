"""
Legacy HTTP session API.

Polling clients create, update and read sessions directly against the
session store. These sessions have no members and are left to the
reaper once idle.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from app.dependencies import get_session_store
from app.exceptions import NotFoundError
from app.models.session import Session
from app.schemas.session import CreateSessionRequest, LegacyUpdateRequest, parse_payload
from app.services.clock import now_ms
from app.services.store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])


# ============================================================================
# Helper Functions
# ============================================================================


def get_existing_session(sessions: SessionStore, session_id: str) -> Session:
    """Look up a session or raise a 404."""
    session = sessions.get(session_id)
    if session is None:
        raise NotFoundError("Session", session_id)
    return session


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body, or None when it is empty or not JSON.

    Validation then rejects None with the same plain-text 500 as any
    other invalid field.
    """
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        logger.debug("Malformed JSON body on %s", request.url.path)
        return None


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/sessions/create")
async def create_session(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Create a paused session at position 0 for a video.
    """
    payload = parse_payload(CreateSessionRequest, await read_json_body(request))

    session = Session(id=sessions.new_id(), video_id=payload.video_id, legacy=True)
    sessions.add(session)

    return session.to_record_dict()


@router.post("/sessions/{session_id}/update")
async def update_session(
    session_id: str,
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Overwrite position and state; the server stamps the update time.
    """
    session = get_existing_session(sessions, session_id)
    update = parse_payload(LegacyUpdateRequest, await read_json_body(request))

    now = now_ms()
    session.last_known_time = update.last_known_time
    session.last_known_time_updated_at = now
    session.state = update.state
    session.touch(now)

    logger.debug("Legacy update of session %s: %s @ %s", session_id, update.state.value, update.last_known_time)
    return session.to_record_dict()


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Read a session. Polling keeps it alive for the reaper.
    """
    session = get_existing_session(sessions, session_id)
    session.touch()
    return session.to_record_dict()
