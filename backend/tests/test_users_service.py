"""Credential store against a real in-memory database."""
import pytest

from notekeeper.core.errors import InvalidCredentialsError, UsernameTakenError, UserNotFoundError
from notekeeper.core.security import PasswordHasher
from notekeeper.models.user import User
from notekeeper.services import users as user_service


async def test_create_user_hashes_password(session):
    user = await user_service.create_user(session, "alice", "secret1")
    await session.commit()

    assert user.id is not None
    assert user.created_at is not None
    assert user.password_hash != "secret1"
    assert PasswordHasher.verify("secret1", user.password_hash)


async def test_duplicate_username_is_a_conflict(session_factory):
    async with session_factory() as session:
        await user_service.create_user(session, "alice", "secret1")
        await session.commit()

    async with session_factory() as session:
        bob = await user_service.create_user(session, "bob", "secret2")
        with pytest.raises(UsernameTakenError):
            await user_service.create_user(session, "alice", "other-password")
        assert bob in session
        await session.commit()

    async with session_factory() as session:
        user = await user_service.find_user_by_username(session, "alice")
        assert PasswordHasher.verify("secret1", user.password_hash)
        assert (await user_service.find_user_by_username(session, "bob")).id == bob.id


async def test_conflict_keeps_pending_objects_of_the_session(session):
    await user_service.create_user(session, "alice", "secret1")
    await session.commit()

    carol = User(username="carol", password_hash=PasswordHasher.hash("secret3"))
    session.add(carol)
    with pytest.raises(UsernameTakenError):
        await user_service.create_user(session, "alice", "other-password")
    await session.commit()

    assert carol.id is not None
    assert (await user_service.find_user_by_username(session, "carol")).id == carol.id


async def test_find_missing_user_raises(session):
    with pytest.raises(UserNotFoundError):
        await user_service.find_user_by_username(session, "nobody")


async def test_authenticate_user(session):
    created = await user_service.create_user(session, "alice", "secret1")
    await session.commit()

    user = await user_service.authenticate_user(session, "alice", "secret1")

    assert user.id == created.id


@pytest.mark.parametrize("username, password", [("alice", "wrong-pass"), ("mallory", "secret1")])
async def test_authenticate_rejects_bad_credentials(session, username, password):
    await user_service.create_user(session, "alice", "secret1")
    await session.commit()

    with pytest.raises(InvalidCredentialsError) as excinfo:
        await user_service.authenticate_user(session, username, password)

    assert excinfo.value.message == "invalid username or password"
