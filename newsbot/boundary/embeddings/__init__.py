"""
Embedding provider boundary layer.

Dependencies: httpx
System role: Embedding API adapter
"""

from newsbot.boundary.embeddings.jina_client import JinaEmbeddingClient

__all__ = ["JinaEmbeddingClient"]
