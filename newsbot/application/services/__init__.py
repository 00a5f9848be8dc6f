"""Service orchestrators."""

from .chat_service import ChatService
from .delivery_service import Connection, DeliveryCoordinator
from .document_service import DocumentService
from .session_service import SessionService

__all__ = [
    "ChatService",
    "Connection",
    "DeliveryCoordinator",
    "DocumentService",
    "SessionService",
]
