"""
Redis client construction and JSON key helpers.

Session metadata and cached embeddings are stored as JSON strings; these
helpers keep the encode/decode logic in one place so the services never deal
with raw payloads.

Dependencies: redis
System role: Redis connection and serialisation helpers
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def create_redis_client(url: str) -> Redis:
    """
    Build an asyncio Redis client.

    The client connects lazily; callers that need to fail fast should
    ``await client.ping()`` after construction.

    Args:
        url: Redis connection URL

    Returns:
        Redis: Client returning ``str`` values
    """
    logger.info(f"{__name__}:create_redis_client - Creating client for {url.split('@')[-1]}")
    return Redis.from_url(url, decode_responses=True)


async def redis_get_json(redis: Redis, key: str) -> Any | None:
    """
    Load a JSON value from Redis.

    Returns None on missing key or malformed payload.
    """
    raw = await redis.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(
            "Malformed JSON payload in Redis",
            extra={"key": key, "raw_preview": str(raw)[:100]},
        )
        return None


async def redis_set_json(
    redis: Redis, key: str, value: Any, *, ttl_seconds: int | None = None
) -> None:
    """
    Store a JSON-serialisable value under the given key with optional TTL.
    """
    data = json.dumps(value, ensure_ascii=False)
    if ttl_seconds is not None:
        await redis.set(key, data, ex=ttl_seconds)
    else:
        await redis.set(key, data)


async def redis_delete(redis: Redis, *keys: str) -> int:
    """
    Delete keys if they exist. Returns the number of keys removed.
    """
    if not keys:
        return 0
    return await redis.delete(*keys)
