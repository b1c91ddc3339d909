"""Shared Redis connection pool for API session lookups."""

from typing import Optional

from redis.asyncio import ConnectionPool, Redis

from src.config import settings

_pool: Optional[ConnectionPool] = None


def get_redis_client() -> Redis:
    """Client on the shared pool; the pool is created on first use."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_url(settings.redis_url, decode_responses=True)
    return Redis(connection_pool=_pool)


async def get_redis() -> Redis:
    """FastAPI dependency for Redis client."""
    return get_redis_client()


async def close_redis() -> None:
    """Drop pooled connections on shutdown."""
    global _pool
    if _pool is not None:
        await _pool.disconnect()
        _pool = None
