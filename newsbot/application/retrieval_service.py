"""
Retrieval service orchestrator.

Embeds a query and runs top-K similarity search against the news collection.
Retrieval failures never reach the caller: they are logged and produce an
empty result, which the chat mediator turns into a "no results" answer.

Dependencies: newsbot.application.embedder, newsbot.boundary.vdb
System role: Retrieval orchestration
"""

import logging

from newsbot.application.embedder import EmbeddingService
from newsbot.boundary.vdb import QdrantStore
from newsbot.models.document import RetrievedDocument

logger = logging.getLogger(__name__)


class RetrievalService:
    """Query-to-documents retrieval over the vector store."""

    def __init__(self, embedder: EmbeddingService, store: QdrantStore, top_k: int = 5) -> None:
        """
        Initialize retrieval service.

        Args:
            embedder: Cached embedding generator
            store: Vector store holding news chunks
            top_k: Number of documents returned per query
        """
        self._embedder = embedder
        self._store = store
        self._top_k = top_k

    async def retrieve(self, query: str) -> list[RetrievedDocument]:
        """
        Retrieve the most similar documents for a query.

        Args:
            query: Natural-language query

        Returns:
            list[RetrievedDocument]: Up to ``top_k`` documents in rank order;
                empty for blank queries or on any failure
        """
        if not query or not query.strip():
            return []

        try:
            vector = await self._embedder.embed(query)
            if self._embedder.is_degraded(vector):
                logger.warning(f"{__name__}:retrieve - Degraded query embedding, skipping search")
                return []
            return await self.retrieve_by_vector(vector)
        except Exception as e:
            logger.exception(f"{__name__}:retrieve - Retrieval failed: {type(e).__name__}: {e}")
            return []

    async def retrieve_by_vector(self, vector: list[float]) -> list[RetrievedDocument]:
        """
        Search by a precomputed embedding.

        Args:
            vector: Query embedding

        Returns:
            list[RetrievedDocument]: Up to ``top_k`` documents; empty on failure
        """
        try:
            documents = await self._store.search(vector, limit=self._top_k)
        except Exception as e:
            logger.error(f"{__name__}:retrieve_by_vector - Search failed: {type(e).__name__}: {e}")
            return []

        logger.info(
            f"{__name__}:retrieve_by_vector - Retrieved {len(documents)} documents",
            extra={"top_k": self._top_k},
        )
        return documents
