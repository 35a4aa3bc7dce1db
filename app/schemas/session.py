"""
Pydantic schemas for session payloads.

Wire field names are camelCase (lastKnownTime, videoId, ...). Integers are
strict: booleans, floats and numeric strings are rejected.
"""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from app.exceptions import InvalidInputError
from app.models.session import PlaybackState
from app.services.identifiers import is_valid_id

NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]


class WireSchema(BaseModel):
    """Base for inbound payloads with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="ignore",
    )


class CreateSessionRequest(WireSchema):
    """Create a session for a video."""

    video_id: NonNegativeInt


class PlaybackUpdate(WireSchema):
    """Playback triple sent by updateSession."""

    last_known_time: NonNegativeInt
    last_known_time_updated_at: NonNegativeInt
    state: PlaybackState


class RebootRequest(WireSchema):
    """Resume-or-create payload sent by reconnecting clients."""

    session_id: Annotated[str, Field(strict=True)]
    last_known_time: NonNegativeInt
    last_known_time_updated_at: NonNegativeInt
    state: PlaybackState
    video_id: NonNegativeInt

    @field_validator("session_id")
    @classmethod
    def check_session_id(cls, value: str) -> str:
        if not is_valid_id(value):
            raise ValueError("malformed session id")
        return value


class LegacyUpdateRequest(WireSchema):
    """Body of POST /sessions/{id}/update."""

    last_known_time: NonNegativeInt
    state: PlaybackState


SchemaT = TypeVar("SchemaT", bound=WireSchema)


def parse_payload(schema: type[SchemaT], data: Any) -> SchemaT:
    """
    Validate a raw payload, raising InvalidInputError on failure.

    The error names the first offending wire field.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(_offending_field(schema, exc)) from None


def _offending_field(schema: type[WireSchema], exc: ValidationError) -> str:
    for error in exc.errors():
        if error["loc"]:
            return str(error["loc"][0])

    # Payload was not an object at all; blame the first field
    name, info = next(iter(schema.model_fields.items()))
    return info.alias or to_camel(name)
