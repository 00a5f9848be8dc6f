"""
Chat delivery configuration settings.

Validation limits, streaming parameters and the background sweep schedule
used by the real-time delivery layer.

Dependencies: pydantic_settings
System role: Chat channel configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class ChatSettings(BaseSettings):
    """Chat channel and streaming configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    max_message_length: int = Field(default=1000, description="Maximum user message length")
    stream_threshold: int = Field(
        default=100,
        description="Answers longer than this many characters are streamed in chunks",
    )
    stream_chunk_words: int = Field(default=3, description="Words per streamed chunk")
    stream_delay_seconds: float = Field(default=0.1, description="Delay between streamed chunks")
    history_default_limit: int = Field(default=50, description="Default history page size")
    search_max_query_length: int = Field(default=100, description="Maximum search query length")

    cleanup_interval_seconds: int = Field(
        default=60 * 60,
        description="How often stale connections and their sessions are swept",
    )
    connection_max_age_seconds: int = Field(
        default=24 * 60 * 60,
        description="Connections older than this have their sessions deleted by the sweep",
    )

    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origin for the web client",
    )
