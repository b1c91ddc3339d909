"""Tests for bearer-token sessions and permission checks."""

import json

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from unittest.mock import AsyncMock

from src.auth.dependencies import get_current_session, require_permission
from src.auth.sessions import (
    SESSION_PREFIX,
    create_session,
    delete_session,
    get_session,
)
from src.config import settings


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestSessions:
    """Test session storage in Redis."""

    @pytest.mark.asyncio
    async def test_create_session_stores_permissions(self, mock_redis):
        token = await create_session(
            mock_redis, "user-1", ["settings:read", "settings:create", "settings:read"]
        )

        assert token
        key, ttl, payload = mock_redis.setex.call_args.args
        assert key == f"{SESSION_PREFIX}{token}"
        assert ttl == settings.api_session_ttl_seconds
        assert json.loads(payload) == {
            "user_id": "user-1",
            "permissions": ["settings:create", "settings:read"],
        }

    @pytest.mark.asyncio
    async def test_create_session_custom_ttl(self, mock_redis):
        await create_session(mock_redis, "user-1", [], ttl=60)
        assert mock_redis.setex.call_args.args[1] == 60

    @pytest.mark.asyncio
    async def test_get_session(self, mock_redis):
        mock_redis.get = AsyncMock(
            return_value=json.dumps({"user_id": "user-1", "permissions": []})
        )

        session = await get_session(mock_redis, "abc")
        assert session["user_id"] == "user-1"
        mock_redis.get.assert_awaited_once_with(f"{SESSION_PREFIX}abc")

    @pytest.mark.asyncio
    async def test_get_session_unknown_token(self, mock_redis):
        assert await get_session(mock_redis, "missing") is None

    @pytest.mark.asyncio
    async def test_get_session_empty_token(self, mock_redis):
        assert await get_session(mock_redis, "") is None
        mock_redis.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_session_corrupt_payload(self, mock_redis):
        mock_redis.get = AsyncMock(return_value="{broken")
        assert await get_session(mock_redis, "abc") is None

    @pytest.mark.asyncio
    async def test_delete_session(self, mock_redis):
        await delete_session(mock_redis, "abc")
        mock_redis.delete.assert_awaited_once_with(f"{SESSION_PREFIX}abc")


class TestPermissionDependencies:
    """Test 401/403 decisions."""

    @pytest.mark.asyncio
    async def test_missing_credentials_unauthorized(self, mock_redis):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_session(None, mock_redis)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_token_unauthorized(self, mock_redis):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_session(_bearer("nope"), mock_redis)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_known_token_returns_session(self, session_redis):
        session = await get_current_session(_bearer("reader-token"), session_redis)
        assert session["user_id"] == "reader"

    @pytest.mark.asyncio
    async def test_permission_granted(self):
        check = require_permission("settings:read")
        session = {"user_id": "u", "permissions": ["settings:read"]}
        assert await check(session) is session

    @pytest.mark.asyncio
    async def test_permission_missing_forbidden(self):
        check = require_permission("settings:delete")
        with pytest.raises(HTTPException) as exc_info:
            await check({"user_id": "u", "permissions": ["settings:read"]})
        assert exc_info.value.status_code == 403
