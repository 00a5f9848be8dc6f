"""
Domain exceptions for the news chat service.

Each error carries a human-readable ``message`` plus a ``details`` dict that
ends up in structured log context. Keyword context passed to the constructor
is merged into ``details`` when it is not None.

Routes map these to HTTP status codes; the embedder, retriever and chat
mediator convert the upstream ones into fallback results instead.

Dependencies: None (pure domain layer)
System role: Error taxonomy shared by every layer
"""

from typing import Any


class NewsbotException(Exception):
    """Root of the service's error hierarchy."""

    def __init__(self, message: str, details: dict[str, Any] | None = None, **context: Any) -> None:
        """
        Args:
            message: Human-readable error message
            details: Extra debugging context
            **context: Named context values; None values are dropped
        """
        self.message = message
        self.details = {**(details or {}), **{k: v for k, v in context.items() if v is not None}}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ValidationError(NewsbotException):
    """User input rejected (empty or oversized message, malformed id)."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details, field=field)


class SessionNotFoundError(NewsbotException):
    """The referenced session has expired or never existed."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}", session_id=session_id)


class SessionStoreError(NewsbotException):
    """
    Redis read or write failed.

    Never swallowed: losing a write would leave ``messageCount`` out of step
    with the stored log.
    """

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, session_id=session_id, operation=operation)


class DocumentProcessingError(NewsbotException):
    """A whole document could not be ingested."""

    def __init__(self, message: str, document_id: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details, document_id=document_id)


class EmbeddingError(NewsbotException):
    """Embedding API call failed or returned an unusable body."""

    def __init__(self, message: str, status_code: int | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details, status_code=status_code)


class VectorStoreError(NewsbotException):
    """Qdrant operation failed (create_collection, upsert, query)."""

    def __init__(self, message: str, operation: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details, operation=operation)


class GenerationError(NewsbotException):
    """Generation model failed or returned no text."""
