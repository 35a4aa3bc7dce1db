"""
Custom exception hierarchy for consistent error responses.

Usage:
    from app.exceptions import InvalidInputError, NotFoundError

    raise InvalidInputError("videoId")
    raise NotFoundError("Session", session_id)
    raise NotInSessionError()

Over HTTP these are converted by the handler registered in main.py to a
plain-text body with the error's status code. Over the WebSocket protocol
the handler replies to the caller with {"errorMessage": "<message>"}.
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base application error with a default status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(
            status_code=self.__class__.status_code,
            detail=message,
        )

    @property
    def message(self) -> str:
        return self.detail


class InvalidInputError(AppError):
    """
    Missing, wrong-typed or out-of-range field.

    Legacy clients expect a 500 for bad input, so the status is kept.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, field: str):
        super().__init__(f"Invalid {field}.")
        self.field = field


class NotFoundError(AppError):
    """Resource not found (404)."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: int | str | None = None):
        if resource_id is not None:
            message = f"{resource} not found (id={resource_id})"
        else:
            message = f"{resource} not found"
        super().__init__(message)


class NotInSessionError(AppError):
    """Operation requires session membership the caller lacks (409)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "You are not in a session."):
        super().__init__(message)


class AlreadyInSessionError(AppError):
    """Join attempted while already a member of a session (409)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "You are already in a session."):
        super().__init__(message)
