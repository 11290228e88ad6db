"""Registration and login endpoints.

These run without the bearer-token check: the caller has no token yet.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.dependencies import get_db, get_token_service
from notekeeper.core.security import TokenService
from notekeeper.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from notekeeper.services.users import authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    user = await create_user(session, payload.username, payload.password)
    await session.commit()
    logger.info("user %d (%s) registered", user.id, user.username)
    return TokenResponse(token=token_service.issue(user.id, user.username))


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    user = await authenticate_user(session, payload.username, payload.password)
    logger.info("user %d (%s) logged in", user.id, user.username)
    return TokenResponse(token=token_service.issue(user.id, user.username))
