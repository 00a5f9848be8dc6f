"""
Chat API endpoints.

Request/response alternative to the WebSocket channel.

Routes:
- POST /chat/message - Send a message and get the persisted user/bot pair
- GET /chat/history/{session_id} - Get chat history, oldest first
- GET /chat/search - Search messages across sessions

Dependencies: newsbot.application.services, newsbot.models.chat
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from newsbot.api.deps import (
    get_chat_service,
    get_session_service,
    get_settings_dependency,
    validate_session_id,
)
from newsbot.application.services.chat_service import ChatService
from newsbot.application.services.session_service import SessionService
from newsbot.configs import Settings
from newsbot.core.exceptions import SessionNotFoundError, SessionStoreError
from newsbot.core.validators import is_valid_session_id
from newsbot.models.chat import (
    ChatHistoryResponse,
    ChatRequest,
    ChatResponse,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Send a chat message and return the persisted exchange.

    Args:
        request: ChatRequest with message and session id
        chat_service: Injected ChatService

    Returns:
        ChatResponse: User and bot messages as stored

    Raises:
        HTTPException(400): Malformed session id
        HTTPException(404): Session not found
        HTTPException(500): Store failure
    """
    if not is_valid_session_id(request.session_id):
        raise HTTPException(status_code=400, detail="Valid session ID required")

    try:
        user_message, bot_message = await chat_service.process_chat(
            session_id=request.session_id,
            message=request.message,
        )
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except SessionStoreError as e:
        logger.error(f"{__name__}:send_message - {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ChatResponse(user_message=user_message, bot_message=bot_message)


@router.get("/history/{session_id}", response_model=ChatHistoryResponse)
async def get_chat_history(
    session_id: str = Depends(validate_session_id),
    limit: int = Query(default=50, description="Maximum number of messages"),
    session_service: SessionService = Depends(get_session_service),
) -> ChatHistoryResponse:
    """
    Get chat history for a session, oldest first.

    Raises:
        HTTPException(400): Malformed session id
        HTTPException(404): Session not found
        HTTPException(500): Store failure
    """
    try:
        if not await session_service.exists(session_id):
            raise HTTPException(status_code=404, detail="Session not found")
        history = await session_service.history(session_id, limit=limit)
    except SessionStoreError as e:
        logger.error(f"{__name__}:get_chat_history - {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ChatHistoryResponse(session_id=session_id, history=history, count=len(history))


@router.get("/search", response_model=SearchResponse)
async def search_messages(
    q: str = Query(default="", description="Search text"),
    limit: int = Query(default=20, ge=1, description="Maximum number of matching messages"),
    session_service: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings_dependency),
) -> SearchResponse:
    """
    Case-insensitive substring search over stored messages.

    Raises:
        HTTPException(400): Empty or too long query
        HTTPException(500): Store failure
    """
    query = q.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Search query required")
    max_length = settings.chat.search_max_query_length
    if len(q) > max_length:
        raise HTTPException(status_code=400, detail=f"Query too long (max {max_length} characters)")

    try:
        results = await session_service.search_messages(query, limit=limit)
    except SessionStoreError as e:
        logger.error(f"{__name__}:search_messages - {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return SearchResponse(
        query=query,
        results=results,
        count=sum(len(group.messages) for group in results),
    )
