"""
Embedding provider configuration settings.

Settings for the Jina embeddings HTTP API used to vectorise queries and chunks.

Dependencies: pydantic_settings
System role: Embedding client configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Jina embeddings API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JINA_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Jina API key")
    api_url: str = Field(
        default="https://api.jina.ai/v1/embeddings",
        description="Jina embeddings endpoint",
    )
    model: str = Field(
        default="jina-embeddings-v2-base-en",
        description="Embedding model (768-dim output)",
    )
    timeout_seconds: float = Field(default=30.0, description="Request timeout in seconds")
    max_input_chars: int = Field(
        default=8000,
        description="Input text is truncated to this many characters before embedding",
    )
