"""Security helpers for password hashing and bearer token signing."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from itsdangerous import BadData, URLSafeTimedSerializer
from passlib.context import CryptContext

from .errors import InvalidTokenError


_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context.verify(password, hashed)


@dataclass(frozen=True, slots=True)
class Identity:
    """The authenticated caller carried by a verified token."""

    user_id: int
    username: str


class TokenService:
    """Issue and verify signed, self-contained identity tokens.

    Tokens are stateless: nothing is stored server-side, so a token stays valid
    until it expires. The signing key is fixed at construction.
    """

    def __init__(self, secret_key: str, expires_in_seconds: int, salt: str = "notekeeper-auth") -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if expires_in_seconds <= 0:
            raise ValueError("expires_in_seconds must be positive")
        self._serializer = URLSafeTimedSerializer(secret_key, salt=salt)
        self._expires_in = expires_in_seconds

    @property
    def expires_in(self) -> int:
        return self._expires_in

    def issue(self, user_id: int, username: str) -> str:
        now = int(time.time())
        payload = {
            "sub": user_id,
            "username": username,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return self._serializer.dumps(payload)

    def verify(self, token: str) -> Identity:
        try:
            payload = self._serializer.loads(token, max_age=self._expires_in)
        except BadData as exc:
            raise InvalidTokenError(context={"reason": type(exc).__name__}) from exc
        return self._identity_from(payload)

    @staticmethod
    def _identity_from(payload: Any) -> Identity:
        if not isinstance(payload, dict):
            raise InvalidTokenError(context={"reason": "payload is not an object"})

        user_id = payload.get("sub")
        username = payload.get("username")
        expires_at = payload.get("exp")
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
            raise InvalidTokenError(context={"reason": "bad subject"})
        if not isinstance(username, str) or not username:
            raise InvalidTokenError(context={"reason": "bad username"})
        if not isinstance(expires_at, int) or expires_at < int(time.time()):
            raise InvalidTokenError(context={"reason": "expired"})
        return Identity(user_id=user_id, username=username)
