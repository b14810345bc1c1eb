"""Tests for credential hashing and bearer tokens."""

from datetime import timedelta

import pytest
from storefront.identity.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_is_not_the_password(self):
        hashed = hash_password("secreto1")
        assert hashed != "secreto1"

    def test_verify_round_trip(self):
        hashed = hash_password("secreto1")
        assert verify_password("secreto1", hashed)
        assert not verify_password("secreto2", hashed)


class TestTokens:
    def test_token_carries_subject_and_role(self):
        token = create_access_token("user-001", "ADMIN")
        claims = decode_access_token(token)

        assert claims["sub"] == "user-001"
        assert claims["role"] == "ADMIN"

    def test_expired_token_is_rejected(self):
        token = create_access_token("user-001", "USER", expires_delta=timedelta(seconds=-1))
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage_token_is_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not-a-jwt")

    def test_token_signed_with_other_secret_is_rejected(self, monkeypatch):
        token = create_access_token("user-001", "USER")
        monkeypatch.setenv("JWT_SECRET", "another-secret")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
