"""
Vector store configuration settings.

Manages Qdrant connection and collection settings for vector storage and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Qdrant vector store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="QDRANT_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:6333", description="Qdrant server URL")
    api_key: str | None = Field(default=None, description="Qdrant API key (cloud deployments)")
    collection_name: str = Field(default="news_articles", description="Qdrant collection name")

    embedding_dimension: int = Field(
        default=768,
        description="Embedding vector dimension (must match the embedding model)",
    )
    top_k: int = Field(default=5, description="Number of nearest neighbours to retrieve")
    payload_max_length: int = Field(
        default=1000,
        description="Maximum length of string payload fields stored with each point",
    )
