"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app import __version__
from app.dependencies import get_session_store, get_user_registry
from app.services.store import SessionStore, UserRegistry

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    backend: str
    timestamp: str
    sessions: int
    users: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    sessions: SessionStore = Depends(get_session_store),
    users: UserRegistry = Depends(get_user_registry),
):
    """
    Health check endpoint.
    Returns server status and the size of the in-memory stores.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        backend="python-fastapi",
        timestamp=datetime.now(timezone.utc).isoformat(),
        sessions=len(sessions),
        users=len(users),
    )
