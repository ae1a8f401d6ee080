from datetime import timedelta

import pytest

from medikey.core import security


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = security.get_password_hash("secret123")
        assert hashed != "secret123"
        assert security.verify_password("secret123", hashed)
        assert not security.verify_password("wrong", hashed)


class TestTokens:
    def test_access_token_round_trip(self):
        payload = security.decode_token(security.create_access_token(42))
        assert payload["sub"] == "42"
        assert payload["type"] == security.ACCESS_TOKEN_TYPE

    def test_expired_token(self):
        token = security.create_access_token(42, expires_delta=timedelta(seconds=-1))
        with pytest.raises(security.TokenError):
            security.decode_token(token)

    def test_token_type_is_enforced(self):
        emergency = security.create_emergency_token(42)
        with pytest.raises(security.TokenError):
            security.decode_token(emergency)
        with pytest.raises(security.TokenError):
            security.decode_token(security.create_access_token(42), expected_type=security.EMERGENCY_TOKEN_TYPE)
        assert security.decode_token(emergency, expected_type=security.EMERGENCY_TOKEN_TYPE)["sub"] == "42"

    def test_garbage_token(self):
        with pytest.raises(security.TokenError):
            security.decode_token("not-a-jwt")
