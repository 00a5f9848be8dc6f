"""
Core business logic module.

Contains the exception hierarchy, prompt assembly and the generation adapter.
"""

from newsbot.core.exceptions import (
    NewsbotException,
    ValidationError,
    SessionNotFoundError,
    SessionStoreError,
    DocumentProcessingError,
    EmbeddingError,
    VectorStoreError,
    GenerationError,
)

__all__ = [
    "NewsbotException",
    "ValidationError",
    "SessionNotFoundError",
    "SessionStoreError",
    "DocumentProcessingError",
    "EmbeddingError",
    "VectorStoreError",
    "GenerationError",
]
