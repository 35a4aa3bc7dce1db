"""
Pydantic schemas for request validation.
"""

from app.schemas.session import (
    CreateSessionRequest,
    LegacyUpdateRequest,
    PlaybackUpdate,
    RebootRequest,
    parse_payload,
)

__all__ = [
    "CreateSessionRequest",
    "LegacyUpdateRequest",
    "PlaybackUpdate",
    "RebootRequest",
    "parse_payload",
]
