"""Token service and password hashing."""
import time

import pytest
from itsdangerous import URLSafeTimedSerializer

from notekeeper.core.errors import InvalidTokenError
from notekeeper.core.security import Identity, PasswordHasher, TokenService

from conftest import TEST_SALT, TEST_SECRET


class TestTokenService:
    def test_issue_then_verify_returns_identity(self, token_service):
        token = token_service.issue(42, "alice")

        assert token_service.verify(token) == Identity(user_id=42, username="alice")

    def test_token_carries_issued_at_and_expiry(self, token_service):
        token = token_service.issue(7, "bob")
        payload = URLSafeTimedSerializer(TEST_SECRET, salt=TEST_SALT).loads(token)

        assert payload["sub"] == 7
        assert payload["username"] == "bob"
        assert payload["exp"] - payload["iat"] == 3600

    def test_token_signed_with_other_key_is_rejected(self, token_service):
        other = TokenService("another-secret", expires_in_seconds=3600, salt=TEST_SALT)

        with pytest.raises(InvalidTokenError):
            token_service.verify(other.issue(1, "alice"))

    def test_tampered_token_is_rejected(self, token_service):
        token = token_service.issue(1, "alice")
        tampered = "x" + token

        with pytest.raises(InvalidTokenError):
            token_service.verify(tampered)

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_garbage_is_rejected(self, token_service, garbage):
        with pytest.raises(InvalidTokenError):
            token_service.verify(garbage)

    def test_expired_token_is_rejected(self, token_service, monkeypatch):
        token = token_service.issue(1, "alice")
        later = time.time() + 3600 + 5
        monkeypatch.setattr(time, "time", lambda: later)

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "a", "dict"],
            {"sub": "1", "username": "alice"},
            {"sub": True, "username": "alice"},
            {"sub": 1, "username": ""},
            {"sub": 1},
        ],
    )
    def test_malformed_payload_is_rejected(self, token_service, payload):
        if isinstance(payload, dict):
            payload = {**payload, "exp": int(time.time()) + 60}
        token = URLSafeTimedSerializer(TEST_SECRET, salt=TEST_SALT).dumps(payload)

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_past_exp_claim_is_rejected(self, token_service):
        payload = {"sub": 1, "username": "alice", "exp": int(time.time()) - 10}
        token = URLSafeTimedSerializer(TEST_SECRET, salt=TEST_SALT).dumps(payload)

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    @pytest.mark.parametrize("secret, ttl", [("", 60), ("key", 0), ("key", -5)])
    def test_constructor_rejects_bad_configuration(self, secret, ttl):
        with pytest.raises(ValueError):
            TokenService(secret, expires_in_seconds=ttl)


def test_password_hash_is_salted_and_verifiable():
    first = PasswordHasher.hash("secret1")
    second = PasswordHasher.hash("secret1")

    assert first != "secret1"
    assert first != second
    assert PasswordHasher.verify("secret1", first)
    assert not PasswordHasher.verify("secret2", first)
