"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from newsbot.configs.base import BaseSettings
from newsbot.configs.chat import ChatSettings
from newsbot.configs.embedding import EmbeddingSettings
from newsbot.configs.generation import GenerationSettings
from newsbot.configs.ingestion import IngestionSettings
from newsbot.configs.cache import RedisSettings
from newsbot.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    redis: RedisSettings = RedisSettings()
    vector_store: VectorStoreSettings = VectorStoreSettings()
    embedding: EmbeddingSettings = EmbeddingSettings()
    generation: GenerationSettings = GenerationSettings()
    chat: ChatSettings = ChatSettings()
    ingestion: IngestionSettings = IngestionSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from newsbot.configs import get_settings
        settings = get_settings()
    """
    return Settings()
