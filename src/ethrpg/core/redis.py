"""Redis client helper."""
from redis import asyncio as aioredis

from ethrpg.core.config import settings

_redis = None


def get_redis():
    """Lazy init and return Redis client, or None when REDIS_URL is unset."""
    global _redis  # noqa: PLW0603
    if not settings.redis_url:
        return None
    if _redis is None:
        _redis = aioredis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis
