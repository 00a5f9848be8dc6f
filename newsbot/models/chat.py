"""
Chat domain models and schemas.

Persisted chat messages and request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints

from newsbot.models.common import CamelModel


class MessageType(str, Enum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


class SourceReference(CamelModel):
    """Reduced view of a retrieved document attached to a bot answer."""

    title: str = ""
    url: str = ""
    source: str = ""
    published_at: str | None = None


class ChatMessage(CamelModel):
    """
    Single message in a session log.

    Messages are immutable once stored.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: MessageType
    content: str
    timestamp: datetime
    sources: list[SourceReference] = Field(default_factory=list)
    retrieved_docs: int = 0
    is_error: bool = False


class ChatRequest(CamelModel):
    """Request schema for the non-streaming chat endpoint."""

    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)] = Field(
        description="User question (1-1000 characters)",
    )
    session_id: str = Field(description="Target session UUID")


class ChatResponse(CamelModel):
    """Persisted user/bot message pair returned by the chat endpoint."""

    success: bool = True
    user_message: ChatMessage
    bot_message: ChatMessage


class ChatHistoryResponse(CamelModel):
    """Response schema for chat history."""

    success: bool = True
    session_id: str
    history: list[ChatMessage]
    count: int = Field(description="Number of messages returned")


class SearchResultGroup(CamelModel):
    """Messages matching a search query, grouped by session."""

    session_id: str
    messages: list[ChatMessage]


class SearchResponse(CamelModel):
    """Response schema for message search."""

    success: bool = True
    query: str
    results: list[SearchResultGroup]
    count: int = Field(description="Total number of matching messages")
