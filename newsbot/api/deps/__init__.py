"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_delivery_coordinator,
    get_document_service,
    get_redis,
    get_session_service,
    get_settings_dependency,
    get_vector_store,
    get_ws_delivery_coordinator,
    validate_session_id,
)

__all__ = [
    "get_chat_service",
    "get_delivery_coordinator",
    "get_document_service",
    "get_redis",
    "get_session_service",
    "get_settings_dependency",
    "get_vector_store",
    "get_ws_delivery_coordinator",
    "validate_session_id",
]
