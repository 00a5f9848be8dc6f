"""
Redis configuration settings.

Manages the Redis connection used for session state and the embedding cache,
plus the TTL and size limits applied to the keys stored there.

Dependencies: pydantic, pydantic_settings
System role: Session store and cache configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class RedisSettings(BaseSettings):
    """Redis connection and key lifetime configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="redis://localhost:6379", description="Redis connection URL")

    session_ttl_seconds: int = Field(
        default=24 * 60 * 60,
        description="Session TTL, refreshed on every write",
    )
    max_messages_per_session: int = Field(
        default=200,
        description="Bounded message log length per session",
    )
    embedding_cache_ttl_seconds: int = Field(
        default=7 * 24 * 60 * 60,
        description="TTL for cached embedding vectors",
    )
