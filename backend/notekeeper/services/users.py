"""Credential store: user creation and lookup."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.errors import InvalidCredentialsError, UsernameTakenError, UserNotFoundError
from notekeeper.core.security import PasswordHasher
from notekeeper.models.user import User

logger = logging.getLogger(__name__)


async def create_user(session: AsyncSession, username: str, password: str) -> User:
    """Insert a user, relying on the unique index to reject duplicate usernames.

    There is no existence pre-check: two concurrent registrations race on the
    insert and the loser gets ``UsernameTakenError``. The insert runs in a
    savepoint, so other pending work in ``session`` survives a conflict.
    """

    user = User(username=username, password_hash=PasswordHasher.hash(password))
    try:
        async with session.begin_nested():
            session.add(user)
            await session.flush()
    except IntegrityError as exc:
        raise UsernameTakenError(context={"username": username}) from exc
    return user


async def find_user_by_username(session: AsyncSession, username: str) -> User:
    result = await session.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(context={"username": username})
    return user


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User:
    try:
        user = await find_user_by_username(session, username)
    except UserNotFoundError as exc:
        logger.warning("login for unknown user %r", username)
        raise InvalidCredentialsError() from exc
    if not PasswordHasher.verify(password, user.password_hash):
        logger.warning("wrong password for user %r", username)
        raise InvalidCredentialsError()
    return user
