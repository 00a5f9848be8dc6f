"""
Streaming event schemas for the WebSocket chat channel.

Defines event types and payloads exchanged between clients and the
delivery coordinator. Frames are JSON objects of the form
``{"event": "<type>", "data": {...}}``.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from newsbot.models.chat import MessageType, SourceReference
from newsbot.models.common import CamelModel


class StreamEventType(str, Enum):
    """Server-to-client event types."""

    SESSION_JOINED = "session_joined"
    MESSAGE_RECEIVED = "message_received"
    MESSAGE_STREAM = "message_stream"
    BOT_TYPING = "bot_typing"
    SESSION_CLEARED = "session_cleared"
    SESSION_INFO = "session_info"
    SYSTEM_MESSAGE = "system_message"
    ERROR = "error"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    JOIN_SESSION = "join_session"
    CHAT_MESSAGE = "chat_message"
    CLEAR_SESSION = "clear_session"
    GET_SESSION_INFO = "get_session_info"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    @classmethod
    def error(cls, message: str) -> "StreamEvent":
        return cls(event=StreamEventType.ERROR, data={"message": message})


class ClientEvent(BaseModel):
    """Inbound frame from a client."""

    event: ClientEventType
    data: dict[str, Any] = Field(default_factory=dict)


class JoinSessionData(CamelModel):
    """Payload of ``join_session``."""

    session_id: str | None = None


class ChatMessageData(CamelModel):
    """
    Payload of ``chat_message``.

    Older clients send the text under ``content`` instead of ``message``.
    """

    message: str | None = None
    content: str | None = None

    @property
    def text(self) -> str:
        return self.message or self.content or ""


class ConnectionStats(CamelModel):
    """Live connection counts for the delivery coordinator."""

    total_connections: int = 0
    active_sessions: int = 0
    connections_with_sessions: int = 0


class MessageStreamChunk(CamelModel):
    """One ``message_stream`` frame carrying the cumulative answer so far."""

    id: str
    type: MessageType = MessageType.BOT
    content: str
    timestamp: datetime
    sources: list[SourceReference] = Field(default_factory=list)
    is_complete: bool
    retrieved_docs: int = 0
