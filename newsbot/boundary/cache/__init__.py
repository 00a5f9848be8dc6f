"""
Redis boundary layer.

Connection factory and JSON helpers shared by the session store and the
embedding cache.

Dependencies: redis
System role: Key-value store adapter
"""

from newsbot.boundary.cache.redis_client import (
    create_redis_client,
    redis_delete,
    redis_get_json,
    redis_set_json,
)

__all__ = ["create_redis_client", "redis_get_json", "redis_set_json", "redis_delete"]
