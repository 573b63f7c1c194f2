"""Tests for caller identity resolution."""

import time

import pytest
from jose import jwt

from shortlinks.auth import JWTIdentityProvider, extract_token


@pytest.mark.asyncio
class TestJWTIdentityProvider:
    """Test token verification."""

    async def test_resolves_subject(self, identity_provider, token_for):
        assert await identity_provider.resolve(token_for("user_123")) == "user_123"

    async def test_rejects_missing_and_malformed_tokens(self, identity_provider):
        assert await identity_provider.resolve(None) is None
        assert await identity_provider.resolve("") is None
        assert await identity_provider.resolve("not.a.jwt") is None

    async def test_rejects_wrong_signature(self, identity_provider, token_for):
        assert await identity_provider.resolve(token_for("user_123", secret="elsewhere")) is None

    async def test_rejects_expired_token(self, identity_provider):
        token = jwt.encode({"sub": "user_123", "exp": int(time.time()) - 60}, "test-secret", algorithm="HS256")

        assert await identity_provider.resolve(token) is None

    async def test_rejects_token_without_subject(self, identity_provider):
        token = jwt.encode({"email": "a@example.com"}, "test-secret", algorithm="HS256")

        assert await identity_provider.resolve(token) is None

    async def test_audience(self):
        provider = JWTIdentityProvider(secret="s3cret", audience="links")

        good = jwt.encode({"sub": "u1", "aud": "links"}, "s3cret", algorithm="HS256")
        bad = jwt.encode({"sub": "u1", "aud": "billing"}, "s3cret", algorithm="HS256")

        assert await provider.resolve(good) == "u1"
        assert await provider.resolve(bad) is None

    async def test_unconfigured_secret_rejects_everything(self, token_for):
        provider = JWTIdentityProvider(secret="")

        assert await provider.resolve(token_for("user_123")) is None


class TestExtractToken:
    """Test credential extraction from request data."""

    def test_bearer_header(self):
        assert extract_token("Bearer abc.def.ghi") == "abc.def.ghi"
        assert extract_token("bearer abc.def.ghi", "cookie") == "abc.def.ghi"

    def test_cookie_fallback(self):
        assert extract_token(None, "cookie-token") == "cookie-token"
        assert extract_token("Basic dXNlcjpwdw==", "cookie-token") == "cookie-token"

    def test_nothing(self):
        assert extract_token(None) is None
        assert extract_token("Bearer ", "") is None
