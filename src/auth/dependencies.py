"""FastAPI dependencies for bearer-token authentication."""

from __future__ import annotations

from typing import Callable, Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.asyncio import Redis

from src.auth.sessions import get_session
from src.redis_client import get_redis

logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    redis: Redis = Depends(get_redis),
) -> dict:
    """Resolve the bearer token to its session, or answer 401."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    session = await get_session(redis, credentials.credentials)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return session


def require_permission(permission: str) -> Callable:
    """Dependency factory: the caller's session must grant ``permission``.

    Usage::

        @router.post("/", dependencies=[Depends(require_permission("settings:create"))])
    """

    async def dependency(session: dict = Depends(get_current_session)) -> dict:
        if permission not in session.get("permissions", []):
            logger.warning(
                "permission_denied",
                user_id=session.get("user_id"),
                permission=permission,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return session

    return dependency
