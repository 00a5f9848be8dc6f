"""
Generation model configuration settings.

Settings for the Google Gemini chat model that answers queries.

Dependencies: pydantic_settings
System role: LLM configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from newsbot.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Gemini generation configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Google Gemini API key")
    model: str = Field(default="gemini-1.5-flash", description="Gemini model ID")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    timeout_seconds: float = Field(
        default=60.0,
        description="Upper bound for a single generation call",
    )
    history_window: int = Field(
        default=10,
        description="Number of recent messages included in the prompt",
    )
