"""
Session API endpoints.

Routes:
- POST /sessions - Create new session
- GET /sessions/stats - Aggregate session statistics
- GET /sessions/{id} - Get session metadata with live message count
- DELETE /sessions/{id}/clear - Clear session messages
- GET /sessions/{id}/export - Export session with full message log

Dependencies: newsbot.application.services.session_service, newsbot.models
System role: Session management HTTP API
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException

from newsbot.api.deps import get_session_service, validate_session_id
from newsbot.application.services.session_service import SessionService
from newsbot.core.exceptions import SessionStoreError
from newsbot.models.session import (
    ClearSessionResponse,
    SessionExportResponse,
    SessionResponse,
    SessionStatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse)
async def create_session(
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Create a new session with a random UUID.

    Returns:
        SessionResponse: Created session metadata

    Raises:
        HTTPException(500): Creation failed
    """
    try:
        session = await session_service.create(str(uuid.uuid4()))
    except SessionStoreError as e:
        logger.error(f"{__name__}:create_session - {e}")
        raise HTTPException(status_code=500, detail="Failed to create session")
    return SessionResponse(session=session)


@router.get("/stats", response_model=SessionStatsResponse)
async def get_session_stats(
    session_service: SessionService = Depends(get_session_service),
) -> SessionStatsResponse:
    """
    Aggregate statistics across live sessions.

    Raises:
        HTTPException(500): Store failure
    """
    try:
        stats = await session_service.stats()
    except SessionStoreError as e:
        logger.error(f"{__name__}:get_session_stats - {e}")
        raise HTTPException(status_code=500, detail="Failed to get statistics")
    return SessionStatsResponse(stats=stats)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str = Depends(validate_session_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Get session metadata with its live message count.

    Args:
        session_id: Session UUID string
        session_service: Injected SessionService

    Raises:
        HTTPException(400): Malformed session id
        HTTPException(404): Session not found
        HTTPException(500): Store failure
    """
    try:
        session = await session_service.get(session_id)
    except SessionStoreError as e:
        logger.error(f"{__name__}:get_session - {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionResponse(session=session)


@router.delete("/{session_id}/clear", response_model=ClearSessionResponse)
async def clear_session(
    session_id: str = Depends(validate_session_id),
    session_service: SessionService = Depends(get_session_service),
) -> ClearSessionResponse:
    """
    Clear a session's message log; metadata is kept.

    Raises:
        HTTPException(400): Malformed session id
        HTTPException(404): Session not found
        HTTPException(500): Store failure
    """
    try:
        if not await session_service.exists(session_id):
            raise HTTPException(status_code=404, detail="Session not found")
        await session_service.clear(session_id)
    except SessionStoreError as e:
        logger.error(f"{__name__}:clear_session - {e}")
        raise HTTPException(status_code=500, detail="Failed to clear session")
    return ClearSessionResponse()


@router.get("/{session_id}/export", response_model=SessionExportResponse)
async def export_session(
    session_id: str = Depends(validate_session_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionExportResponse:
    """
    Export session metadata with the full message log.

    Raises:
        HTTPException(400): Malformed session id
        HTTPException(404): Session not found
        HTTPException(500): Store failure
    """
    try:
        export_data = await session_service.export(session_id)
    except SessionStoreError as e:
        logger.error(f"{__name__}:export_session - {e}")
        raise HTTPException(status_code=500, detail="Failed to export session")
    if export_data is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionExportResponse(export_data=export_data)
