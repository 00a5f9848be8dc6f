"""News chat backend: session-scoped retrieval, generation and real-time delivery."""
