"""
Shared settings base.

Every concern-specific settings class inherits from this one, so the
``.env`` file, case handling and the process-wide flags (environment, debug,
log level) are declared once.

Dependencies: pydantic, pydantic_settings
System role: Root of the configuration hierarchy
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide flags read from the environment or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment name (development, production)",
    )
    debug: bool = Field(
        default=False,
        description="Run uvicorn with auto-reload",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level name",
    )

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level
