"""Application layer: embedding, retrieval, chunking and service orchestration."""
