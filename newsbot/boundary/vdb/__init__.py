"""
Vector database boundary layer.

Provides the Qdrant store used for chunk storage and retrieval.

Dependencies: qdrant_client
System role: Vector store adapter for RAG retrieval
"""

from newsbot.boundary.vdb.qdrant_store import QdrantStore, sanitize_payload

__all__ = ["QdrantStore", "sanitize_payload"]
