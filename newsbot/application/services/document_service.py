"""
Document ingestion service.

Chunks a news article, embeds each chunk with the article title prepended,
and stores every chunk as one point in the vector collection. Feed polling
and scraping live outside this service; it only accepts finished documents.

Dependencies: newsbot.application.chunker, newsbot.application.embedder, newsbot.boundary.vdb
System role: Ingestion boundary
"""

import logging
import uuid
from datetime import datetime, timezone

from newsbot.application.chunker import SentenceChunker
from newsbot.application.embedder import EmbeddingService
from newsbot.boundary.vdb import QdrantStore
from newsbot.core.exceptions import DocumentProcessingError
from newsbot.models.document import ChunkPayload, CollectionInfo, NewsDocument

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Ingestion orchestrator.

    Handles the chunk -> embed -> upsert flow for one document at a time.
    Chunk-level failures are skipped so one bad chunk does not lose the rest
    of the article.
    """

    def __init__(
        self,
        embedder: EmbeddingService,
        store: QdrantStore,
        chunker: SentenceChunker | None = None,
        min_content_length: int = 50,
    ) -> None:
        """
        Initialize document service.

        Args:
            embedder: Cached embedding generator
            store: Vector store receiving chunk points
            chunker: Optional chunker (default settings if None)
            min_content_length: Documents with shorter content are skipped
        """
        self._embedder = embedder
        self._store = store
        self._chunker = chunker or SentenceChunker()
        self._min_content_length = min_content_length

    async def store_document(self, document: NewsDocument) -> int:
        """
        Chunk, embed and store a document.

        Steps:
        1. Skip documents whose content is too short
        2. Split into sentence-aware chunks
        3. Embed ``"{title}\\n\\n{chunk}"`` per chunk
        4. Upsert each chunk under a fresh UUID point id

        Args:
            document: Article to ingest

        Returns:
            int: Number of chunks stored

        Raises:
            DocumentProcessingError: If the document cannot be processed at all
        """
        content = document.content or ""
        if len(content) < self._min_content_length:
            logger.warning(
                f"{__name__}:store_document - Skipping document with insufficient content",
                extra={"document_id": document.id, "content_length": len(content)},
            )
            return 0

        try:
            chunks = self._chunker.chunk(content)
        except Exception as e:
            raise DocumentProcessingError(
                f"Chunking failed: {type(e).__name__}: {e}",
                document_id=document.id,
            ) from e

        logger.info(
            f"{__name__}:store_document - Processing {len(chunks)} chunks",
            extra={"document_id": document.id, "title": document.title},
        )

        published_at = document.published_at or datetime.now(timezone.utc).isoformat()
        stored = 0
        for index, chunk in enumerate(chunks):
            payload = ChunkPayload(
                title=document.title or "Untitled",
                content=chunk,
                url=document.url or "",
                published_at=published_at,
                source=document.source or "Unknown",
                chunk_index=index,
                original_doc_id=document.id or "unknown",
                original_chunk_id=f"{document.id}_chunk_{index}",
            )
            if await self._store_chunk(f"{document.title}\n\n{chunk}", payload):
                stored += 1

        logger.info(
            f"{__name__}:store_document - Stored {stored}/{len(chunks)} chunks",
            extra={"document_id": document.id},
        )
        return stored

    async def _store_chunk(self, text: str, payload: ChunkPayload) -> bool:
        """Embed and upsert one chunk. Returns False if the chunk was skipped."""
        vector = await self._embedder.embed(text)
        if self._embedder.is_degraded(vector):
            logger.error(
                f"{__name__}:_store_chunk - Degraded embedding, skipping chunk",
                extra={"chunk_id": payload.original_chunk_id},
            )
            return False

        try:
            await self._store.upsert_point(
                str(uuid.uuid4()),
                vector,
                payload.model_dump(by_alias=True),
            )
        except Exception as e:
            logger.error(
                f"{__name__}:_store_chunk - Failed to store chunk: {e}",
                extra={"chunk_id": payload.original_chunk_id},
            )
            return False
        return True

    async def collection_info(self) -> CollectionInfo | None:
        """Point counts and status of the news collection."""
        return await self._store.collection_info()
