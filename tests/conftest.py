"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory Redis, session store, service mocks, sample documents
Dependencies: pytest, newsbot
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from newsbot.application.embedder import EmbeddingService
from newsbot.application.services.session_service import SessionService
from newsbot.models.document import RetrievedDocument
from tests.utils import InMemoryRedis, make_document

DIMENSION = 768


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    """Fresh in-memory Redis per test."""
    return InMemoryRedis()


@pytest.fixture
def session_service(fake_redis: InMemoryRedis) -> SessionService:
    """SessionService backed by the in-memory Redis."""
    return SessionService(fake_redis, ttl_seconds=86400, max_messages=200)


@pytest.fixture
def mock_jina_client() -> MagicMock:
    """
    Mock embedding client.

    Returns:
        MagicMock: ``embed`` returns a valid 768-dim vector
    """
    client = MagicMock()
    client.embed = AsyncMock(return_value=[0.1] * DIMENSION)
    return client


@pytest.fixture
def embedder(fake_redis: InMemoryRedis, mock_jina_client: MagicMock) -> EmbeddingService:
    return EmbeddingService(fake_redis, mock_jina_client, dimension=DIMENSION)


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Mock QdrantStore with async methods."""
    store = MagicMock()
    store.search = AsyncMock(return_value=[])
    store.upsert_point = AsyncMock()
    store.collection_info = AsyncMock(return_value=None)
    store.ensure_collection = AsyncMock()
    return store


@pytest.fixture
def sample_documents() -> list[RetrievedDocument]:
    """Three retrieved documents, two sharing a url."""
    return [
        make_document(1),
        make_document(2),
        make_document(3, url="https://news.example.com/1"),
    ]
