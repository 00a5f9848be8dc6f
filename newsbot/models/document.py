"""
News document models.

Input record for the ingestion boundary, the ephemeral retrieval result, and
the payload stored with every indexed chunk.

Dependencies: pydantic
System role: Document and retrieval data structures
"""

from pydantic import Field

from newsbot.models.common import CamelModel


class NewsDocument(CamelModel):
    """Article handed to the ingestion boundary by the acquisition layer."""

    id: str = Field(description="Caller-supplied document identifier")
    title: str = ""
    content: str = ""
    url: str = ""
    published_at: str | None = None
    source: str = ""


class ChunkPayload(CamelModel):
    """Payload stored alongside each indexed chunk vector."""

    title: str
    content: str
    url: str
    published_at: str
    source: str
    chunk_index: int
    original_doc_id: str
    original_chunk_id: str


class RetrievedDocument(CamelModel):
    """Passage returned by similarity search. Never persisted on its own."""

    content: str = ""
    title: str = ""
    url: str = ""
    source: str = ""
    published_at: str | None = None
    similarity_score: float = 0.0


class IngestResponse(CamelModel):
    """Response schema for document ingestion."""

    success: bool = True
    document_id: str
    chunks_stored: int


class CollectionInfo(CamelModel):
    """Summary of the vector collection."""

    points_count: int | None = None
    indexed_vectors_count: int | None = None
    status: str | None = None
