"""
Session domain models and schemas.

Session metadata as persisted in the session store plus request/response
schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from newsbot.models.chat import ChatMessage
from newsbot.models.common import CamelModel


class SessionRecord(CamelModel):
    """Session metadata stored under ``session:{id}``."""

    id: str
    created_at: datetime
    last_activity: datetime
    message_count: int = Field(default=0, ge=0)


class SessionResponse(CamelModel):
    """Response schema for session fetch/create."""

    success: bool = True
    session: SessionRecord


class SessionExport(CamelModel):
    """Full session dump: metadata plus the complete message log."""

    session: SessionRecord
    messages: list[ChatMessage]
    exported_at: datetime


class SessionExportResponse(CamelModel):
    """Response schema for session export."""

    success: bool = True
    export_data: SessionExport


class SessionStats(CamelModel):
    """Aggregate statistics across live sessions."""

    model_config = ConfigDict(frozen=True)

    total_sessions: int = 0
    active_last_hour: int = 0
    active_last_day: int = 0
    total_messages: int = 0
    average_messages_per_session: float = 0.0


class SessionStatsResponse(CamelModel):
    """Response schema for session statistics."""

    success: bool = True
    stats: SessionStats


class ClearSessionResponse(CamelModel):
    """Response schema for clearing a session."""

    success: bool = True
    message: str = "Session cleared successfully"
