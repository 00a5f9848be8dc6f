"""
Document ingestion configuration settings.

Chunking parameters for splitting news articles before indexing.

Dependencies: pydantic_settings
System role: Ingestion pipeline configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Chunking configuration for document ingestion."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGEST_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=500, description="Target chunk size in characters")
    chunk_overlap: int = Field(default=50, description="Approximate overlap in characters")
    min_content_length: int = Field(
        default=50,
        description="Documents with less content than this are skipped",
    )
    min_chunk_length: int = Field(
        default=50,
        description="Chunks this short or shorter are discarded",
    )
