"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.config import get_settings
from notekeeper.core.errors import InvalidTokenError
from notekeeper.core.security import Identity, TokenService
from notekeeper.db.session import get_session

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


@lru_cache
def get_token_service() -> TokenService:
    """Build the token service once from settings; the key never changes afterwards."""

    settings = get_settings()
    return TokenService(
        settings.secret_key,
        expires_in_seconds=settings.access_token_expire_seconds,
        salt=settings.token_salt,
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": BEARER_SCHEME},
    )


async def authenticate_request(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """Verify the bearer token and attach the caller's identity to the request.

    Mounted on the notes router so it runs before any note handler. Missing,
    malformed, tampered or expired credentials are rejected with 401.
    """

    header = request.headers.get("Authorization")
    if not header:
        raise _unauthorized("missing authorization header")

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise _unauthorized("invalid authorization header")

    try:
        identity = token_service.verify(parts[1])
    except InvalidTokenError as exc:
        logger.info("rejected token: %s", exc.context.get("reason", "unknown"))
        raise _unauthorized("invalid token") from exc

    request.state.identity = identity
    return identity


def get_identity(request: Request) -> Identity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        logger.error("no identity on request; authentication did not run")
        raise _unauthorized("unauthorized")
    return identity


def require_path_owner(user_id: int, identity: Identity = Depends(get_identity)) -> Identity:
    """Reject requests whose ``{user_id}`` path segment is not the caller."""

    if identity.user_id != user_id:
        logger.warning("user id mismatch: token=%d path=%d", identity.user_id, user_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")
    return identity
