"""
Dependency injection container.

Components are built once in the application lifespan and stored on
``app.state``; these getters hand them to route handlers.

Dependencies: fastapi, newsbot.configs, newsbot.application, newsbot.boundary
System role: DI container for service injection
"""

from fastapi import HTTPException, Request, WebSocket, status
from redis.asyncio import Redis

from newsbot.application.services import (
    ChatService,
    DeliveryCoordinator,
    DocumentService,
    SessionService,
)
from newsbot.boundary.vdb import QdrantStore
from newsbot.configs import Settings, get_settings
from newsbot.core.validators import is_valid_session_id


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_redis(request: Request) -> Redis:
    return request.app.state.redis


def get_vector_store(request: Request) -> QdrantStore:
    return request.app.state.vector_store


def get_session_service(request: Request) -> SessionService:
    """
    Get session service instance.

    Args:
        request: Incoming request (carries app state)

    Returns:
        SessionService: Shared session service
    """
    return request.app.state.session_service


def get_chat_service(request: Request) -> ChatService:
    """
    Get chat service instance.

    Args:
        request: Incoming request (carries app state)

    Returns:
        ChatService: Shared chat service with retriever and generator
    """
    return request.app.state.chat_service


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service


def get_delivery_coordinator(request: Request) -> DeliveryCoordinator:
    return request.app.state.delivery_coordinator


def get_ws_delivery_coordinator(websocket: WebSocket) -> DeliveryCoordinator:
    """WebSocket variant of ``get_delivery_coordinator``."""
    return websocket.app.state.delivery_coordinator


def validate_session_id(session_id: str) -> str:
    """
    Path dependency rejecting malformed session ids before the store is touched.

    Raises:
        HTTPException: 400 if the id is not a canonical UUID string
    """
    if not is_valid_session_id(session_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid session ID format",
        )
    return session_id
