"""
Qdrant vector store.

Owns the single news collection: creates it when absent, upserts chunk points
and runs nearest-neighbour search with payload. This is the only module that
talks to Qdrant directly.

Dependencies: qdrant_client, newsbot.core.exceptions
System role: Vector index adapter
"""

import logging
import math
import re
from typing import Any

from qdrant_client import AsyncQdrantClient
from qdrant_client.http import models as qmodels

from newsbot.core.exceptions import VectorStoreError
from newsbot.models.document import CollectionInfo, RetrievedDocument

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")


def sanitize_payload(payload: dict[str, Any], max_length: int = 1000) -> dict[str, Any]:
    """
    Clean a payload before it is stored with a point.

    Strings lose control characters and are capped at ``max_length``;
    non-finite numbers become 0; lists are capped at 10 short strings;
    None values are dropped; anything else is stringified.

    Args:
        payload: Raw payload dict
        max_length: Maximum length of string values

    Returns:
        dict: Sanitized copy
    """
    sanitized: dict[str, Any] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, str):
            sanitized[key] = _CONTROL_CHARS.sub("", value)[:max_length]
        elif isinstance(value, bool):
            sanitized[key] = value
        elif isinstance(value, (int, float)):
            sanitized[key] = value if math.isfinite(value) else 0
        elif isinstance(value, (list, tuple)):
            sanitized[key] = [str(item)[:100] for item in value if item is not None][:10]
        else:
            sanitized[key] = str(value)[:100]
    return sanitized


class QdrantStore:
    """
    Single-collection Qdrant store.

    The async client is injected at construction time so the application
    lifespan owns its lifecycle.

    Usage:
        store = QdrantStore(client, collection_name="news_articles", dimension=768)
        await store.ensure_collection()
        await store.upsert_point(point_id, vector, payload)
        docs = await store.search(query_vector, limit=5)
    """

    def __init__(
        self,
        client: AsyncQdrantClient,
        collection_name: str = "news_articles",
        dimension: int = 768,
        payload_max_length: int = 1000,
    ) -> None:
        self._client = client
        self._collection_name = collection_name
        self._dimension = dimension
        self._payload_max_length = payload_max_length

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def dimension(self) -> int:
        return self._dimension

    # ------------------------------------------------------------------
    # Collection lifecycle
    # ------------------------------------------------------------------

    async def ensure_collection(self) -> bool:
        """
        Create the collection if it does not exist.

        Returns:
            bool: True if the collection was created, False if it already existed

        Raises:
            VectorStoreError: If Qdrant cannot be reached or creation fails
        """
        try:
            if await self._client.collection_exists(self._collection_name):
                logger.info(f"{__name__}:ensure_collection - Collection {self._collection_name} already exists")
                return False

            await self._client.create_collection(
                collection_name=self._collection_name,
                vectors_config=qmodels.VectorParams(
                    size=self._dimension,
                    distance=qmodels.Distance.COSINE,
                ),
            )
            logger.info(
                f"{__name__}:ensure_collection - Created collection {self._collection_name}",
                extra={"dimension": self._dimension},
            )
            return True
        except Exception as e:
            raise VectorStoreError(
                f"Failed to initialize collection {self._collection_name}: {type(e).__name__}: {e}",
                operation="create_collection",
            ) from e

    async def collection_info(self) -> CollectionInfo | None:
        """
        Fetch point counts and status for the collection.

        Returns:
            CollectionInfo | None: Summary, or None if Qdrant could not answer
        """
        try:
            info = await self._client.get_collection(self._collection_name)
        except Exception as e:
            logger.error(f"{__name__}:collection_info - {type(e).__name__}: {e}")
            return None

        status = getattr(info, "status", None)
        return CollectionInfo(
            points_count=info.points_count,
            indexed_vectors_count=info.indexed_vectors_count,
            status=status.value if hasattr(status, "value") else status,
        )

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    async def upsert_point(
        self,
        point_id: str,
        vector: list[float],
        payload: dict[str, Any],
    ) -> None:
        """
        Insert or replace a single point.

        Args:
            point_id: UUID string point identifier
            vector: Embedding with exactly ``dimension`` components
            payload: Chunk payload; sanitized before storage

        Raises:
            VectorStoreError: On dimension mismatch or upsert failure
        """
        if len(vector) != self._dimension:
            raise VectorStoreError(
                f"Vector has {len(vector)} dimensions, expected {self._dimension}",
                operation="upsert",
            )

        point = qmodels.PointStruct(
            id=point_id,
            vector=vector,
            payload=sanitize_payload(payload, self._payload_max_length),
        )
        try:
            await self._client.upsert(
                collection_name=self._collection_name,
                points=[point],
                wait=True,
            )
        except Exception as e:
            raise VectorStoreError(
                f"Upsert failed: {type(e).__name__}: {e}",
                operation="upsert",
                details={"point_id": point_id},
            ) from e

    async def search(self, vector: list[float], limit: int = 5) -> list[RetrievedDocument]:
        """
        Nearest-neighbour search by cosine similarity.

        Args:
            vector: Query embedding
            limit: Number of neighbours to return

        Returns:
            list[RetrievedDocument]: Results in rank order

        Raises:
            VectorStoreError: If the query fails
        """
        try:
            response = await self._client.query_points(
                collection_name=self._collection_name,
                query=vector,
                limit=limit,
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            raise VectorStoreError(
                f"Search failed: {type(e).__name__}: {e}",
                operation="query",
            ) from e

        documents = []
        for point in response.points:
            payload = point.payload or {}
            documents.append(
                RetrievedDocument(
                    content=payload.get("content", ""),
                    title=payload.get("title", ""),
                    url=payload.get("url", ""),
                    source=payload.get("source", ""),
                    published_at=payload.get("publishedAt"),
                    similarity_score=float(point.score),
                )
            )
        return documents
