"""Bearer-token sessions stored in Redis."""

from __future__ import annotations

import json
import secrets
from typing import Iterable, Optional

import structlog
from redis.asyncio import Redis

from src.config import settings

logger = structlog.get_logger()

SESSION_PREFIX = "api_session:"

SETTINGS_PERMISSIONS = (
    "settings:create",
    "settings:read",
    "settings:update",
    "settings:delete",
)


async def create_session(
    redis: Redis,
    user_id: str,
    permissions: Iterable[str],
    ttl: Optional[int] = None,
) -> str:
    """Create an API session in Redis.

    Args:
        redis: Redis client
        user_id: Identifier of the back-office user
        permissions: Permission names granted to the token
        ttl: Lifetime in seconds, defaults to ``api_session_ttl_seconds``

    Returns:
        Session token (random string)
    """
    token = secrets.token_urlsafe(32)
    session_data = json.dumps({
        "user_id": user_id,
        "permissions": sorted(set(permissions)),
    })

    await redis.setex(
        f"{SESSION_PREFIX}{token}",
        ttl or settings.api_session_ttl_seconds,
        session_data,
    )

    logger.info("api_session_created", user_id=user_id)
    return token


async def get_session(redis: Redis, token: str) -> Optional[dict]:
    """Get session data from Redis.

    Returns:
        Session dict with user_id and permissions, or None for an unknown
        or unreadable token
    """
    if not token:
        return None

    data = await redis.get(f"{SESSION_PREFIX}{token}")
    if not data:
        return None

    try:
        session = json.loads(data)
    except (json.JSONDecodeError, TypeError):
        logger.warning("api_session_corrupt")
        return None
    if not isinstance(session, dict):
        return None
    return session


async def delete_session(redis: Redis, token: str) -> None:
    """Delete an API session from Redis."""
    await redis.delete(f"{SESSION_PREFIX}{token}")
