"""Application error taxonomy.

Services raise these; the handlers registered in ``notekeeper.api.errors``
turn them into the error envelope with the matching HTTP status. ``message`` is
safe to show a client, ``context`` is only ever logged.
"""
from __future__ import annotations

from typing import Any

from fastapi import status


class NotekeeperError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "internal error"

    def __init__(self, message: str | None = None, context: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"

    def __init__(
        self,
        message: str | None = None,
        fields: dict[str, str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.fields = fields or {}
        if message is None and self.fields:
            message = ", ".join(self.fields.values())
        super().__init__(message, context)


class UnauthorizedError(NotekeeperError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class InvalidTokenError(UnauthorizedError):
    default_message = "invalid token"


class InvalidCredentialsError(UnauthorizedError):
    default_message = "invalid username or password"


class ForbiddenError(NotekeeperError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "forbidden access"


class NoteForbiddenError(ForbiddenError):
    def __init__(self, note_id: int, user_id: int) -> None:
        super().__init__(context={"note_id": note_id, "user_id": user_id})


class NotFoundError(NotekeeperError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class UserNotFoundError(NotFoundError):
    default_message = "user not found"


class NoteNotFoundError(NotFoundError):
    default_message = "note not found"

    def __init__(self, note_id: int) -> None:
        super().__init__(context={"note_id": note_id})


class ConflictError(NotekeeperError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "conflict"


class UsernameTakenError(ConflictError):
    default_message = "username already exists"


class InternalError(NotekeeperError):
    """Store or signing failure; the message returned to clients stays generic."""
