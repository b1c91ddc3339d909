"""Issue an API bearer token for local use.

Usage:
    python -m scripts.issue_token admin@lab.local
    python -m scripts.issue_token viewer --permission settings:read
"""

import argparse
import asyncio

from src.auth.sessions import SETTINGS_PERMISSIONS, create_session
from src.redis_client import close_redis, get_redis_client


async def issue(user_id: str, permissions: list, ttl: int) -> str:
    try:
        return await create_session(get_redis_client(), user_id, permissions, ttl=ttl or None)
    finally:
        await close_redis()


def main():
    parser = argparse.ArgumentParser(description="Issue an API session token")
    parser.add_argument("user_id")
    parser.add_argument(
        "--permission",
        action="append",
        choices=SETTINGS_PERMISSIONS,
        help="Grant one permission (repeatable). Defaults to all settings permissions.",
    )
    parser.add_argument("--ttl", type=int, default=0, help="Lifetime in seconds")
    args = parser.parse_args()

    token = asyncio.run(issue(args.user_id, args.permission or list(SETTINGS_PERMISSIONS), args.ttl))
    print(token)


if __name__ == "__main__":
    main()
