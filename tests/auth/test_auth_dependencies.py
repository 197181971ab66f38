"""
Tests for Supabase JWT verification.

The JWKS client and jwt.decode are mocked; no keys are fetched.
"""

import pytest
from fastapi import HTTPException
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from unittest.mock import MagicMock, patch

from spontaneity.auth.dependencies import get_authenticated_user

DEPS = "spontaneity.auth.dependencies"


@pytest.fixture
def mock_jwks():
    with patch(f"{DEPS}.get_jwks_client") as mock:
        jwks_client = MagicMock()
        jwks_client.get_signing_key_from_jwt.return_value = MagicMock(key="public-key")
        mock.return_value = jwks_client
        yield jwks_client


@pytest.mark.asyncio
async def test_valid_token(mock_jwks):
    payload = {
        "sub": "user-123",
        "app_metadata": {"role": "partner", "partner_id": "acme"},
    }
    with patch(f"{DEPS}.decode", return_value=payload) as mock_decode:
        user = await get_authenticated_user("Bearer good-token")

    assert user.user_id == "user-123"
    assert user.access_token == "good-token"
    assert user.role == "partner"
    assert user.partner_id == "acme"

    kwargs = mock_decode.call_args.kwargs
    assert kwargs["algorithms"] == ["ES256"]
    assert kwargs["audience"] == "authenticated"
    assert kwargs["issuer"] == "http://localhost:54321/auth/v1"


@pytest.mark.asyncio
async def test_missing_app_metadata_defaults_to_empty(mock_jwks):
    with patch(f"{DEPS}.decode", return_value={"sub": "user-123"}):
        user = await get_authenticated_user("Bearer good-token")

    assert user.app_metadata == {}
    assert user.role is None


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer"])
async def test_malformed_header(header):
    with pytest.raises(HTTPException) as exc_info:
        await get_authenticated_user(header)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_expired_token(mock_jwks):
    with patch(f"{DEPS}.decode", side_effect=ExpiredSignatureError("expired")):
        with pytest.raises(HTTPException) as exc_info:
            await get_authenticated_user("Bearer old-token")

    assert exc_info.value.detail["error"] == "token_expired"


@pytest.mark.asyncio
async def test_invalid_token(mock_jwks):
    with patch(f"{DEPS}.decode", side_effect=InvalidTokenError("bad signature")):
        with pytest.raises(HTTPException) as exc_info:
            await get_authenticated_user("Bearer forged-token")

    assert exc_info.value.detail["error"] == "invalid_token"


@pytest.mark.asyncio
async def test_missing_subject(mock_jwks):
    with patch(f"{DEPS}.decode", return_value={"aud": "authenticated"}):
        with pytest.raises(HTTPException) as exc_info:
            await get_authenticated_user("Bearer no-sub")

    assert exc_info.value.status_code == 401
