"""
Document API endpoints.

Ingestion entry point for articles produced by the feed acquisition layer.

Routes:
- POST /documents - Chunk, embed and index one article
- GET /documents/collection - Vector collection summary

Dependencies: newsbot.application.services.document_service, newsbot.models.document
System role: Document ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from newsbot.api.deps import get_document_service
from newsbot.application.services.document_service import DocumentService
from newsbot.core.exceptions import DocumentProcessingError
from newsbot.models.document import CollectionInfo, IngestResponse, NewsDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=IngestResponse)
async def ingest_document(
    document: NewsDocument,
    document_service: DocumentService = Depends(get_document_service),
) -> IngestResponse:
    """
    Ingest one news article.

    Articles with too little content are accepted and skipped (0 chunks).

    Args:
        document: Article record
        document_service: Injected DocumentService

    Returns:
        IngestResponse: Number of chunks stored

    Raises:
        HTTPException(500): Document could not be processed
    """
    try:
        stored = await document_service.store_document(document)
    except DocumentProcessingError as e:
        logger.error(
            f"{__name__}:ingest_document - {e}",
            extra={"document_id": document.id},
        )
        raise HTTPException(status_code=500, detail=f"Failed to process document: {e.message}")

    return IngestResponse(document_id=document.id, chunks_stored=stored)


@router.get("/collection", response_model=CollectionInfo)
async def get_collection_info(
    document_service: DocumentService = Depends(get_document_service),
) -> CollectionInfo:
    """
    Vector collection summary.

    Raises:
        HTTPException(503): Vector store unavailable
    """
    info = await document_service.collection_info()
    if info is None:
        raise HTTPException(status_code=503, detail="Vector store unavailable")
    return info
