"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and builds the
component graph in the lifespan.

Dependencies: fastapi, redis, qdrant_client, httpx, newsbot.api, newsbot.observability, newsbot.configs
System role: Application initialization and configuration
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from qdrant_client import AsyncQdrantClient
from redis.asyncio import Redis

from newsbot.api import api_router
from newsbot.api.routers import chat_stream_router
from newsbot.application.chunker import SentenceChunker
from newsbot.application.embedder import EmbeddingService
from newsbot.application.retrieval_service import RetrievalService
from newsbot.application.services import (
    ChatService,
    DeliveryCoordinator,
    DocumentService,
    SessionService,
)
from newsbot.boundary.cache import create_redis_client
from newsbot.boundary.embeddings import JinaEmbeddingClient
from newsbot.boundary.vdb import QdrantStore
from newsbot.configs import Settings, get_settings
from newsbot.core.generation import GeminiGenerator
from newsbot.observability.logger import configure_logging
from newsbot.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

SERVICE_NAME = "News RAG Chatbot API"
SERVICE_VERSION = "0.1.0"


def build_components(
    app: FastAPI,
    settings: Settings,
    redis: Redis,
    qdrant_client: AsyncQdrantClient,
    http_client: httpx.AsyncClient,
) -> None:
    """
    Construct every service once and store it on ``app.state``.

    Args:
        app: Application whose state receives the components
        settings: Application settings
        redis: Connected Redis client
        qdrant_client: Connected Qdrant client
        http_client: Shared HTTP client for upstream APIs
    """
    vector_store = QdrantStore(
        qdrant_client,
        collection_name=settings.vector_store.collection_name,
        dimension=settings.vector_store.embedding_dimension,
        payload_max_length=settings.vector_store.payload_max_length,
    )
    embedder = EmbeddingService(
        redis,
        JinaEmbeddingClient(
            http_client,
            api_key=settings.embedding.api_key,
            model=settings.embedding.model,
            api_url=settings.embedding.api_url,
            timeout_seconds=settings.embedding.timeout_seconds,
        ),
        dimension=settings.vector_store.embedding_dimension,
        cache_ttl_seconds=settings.redis.embedding_cache_ttl_seconds,
        max_input_chars=settings.embedding.max_input_chars,
    )
    session_service = SessionService(
        redis,
        ttl_seconds=settings.redis.session_ttl_seconds,
        max_messages=settings.redis.max_messages_per_session,
    )
    chat_service = ChatService(
        retriever=RetrievalService(embedder, vector_store, top_k=settings.vector_store.top_k),
        generator=GeminiGenerator(
            model_id=settings.generation.model,
            temperature=settings.generation.temperature,
            api_key=settings.generation.api_key,
        ),
        sessions=session_service,
        history_window=settings.generation.history_window,
        timeout_seconds=settings.generation.timeout_seconds,
    )
    document_service = DocumentService(
        embedder,
        vector_store,
        chunker=SentenceChunker(
            chunk_size=settings.ingestion.chunk_size,
            overlap=settings.ingestion.chunk_overlap,
            min_chunk_length=settings.ingestion.min_chunk_length,
        ),
        min_content_length=settings.ingestion.min_content_length,
    )
    coordinator = DeliveryCoordinator(
        session_service,
        chat_service,
        max_message_length=settings.chat.max_message_length,
        stream_threshold=settings.chat.stream_threshold,
        stream_chunk_words=settings.chat.stream_chunk_words,
        stream_delay_seconds=settings.chat.stream_delay_seconds,
        history_limit=settings.chat.history_default_limit,
        connection_max_age_seconds=settings.chat.connection_max_age_seconds,
    )

    app.state.redis = redis
    app.state.qdrant_client = qdrant_client
    app.state.http_client = http_client
    app.state.vector_store = vector_store
    app.state.embedder = embedder
    app.state.session_service = session_service
    app.state.chat_service = chat_service
    app.state.document_service = document_service
    app.state.delivery_coordinator = coordinator


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup fails fast if Redis or Qdrant is unreachable; there is no
    degraded startup mode.
    """
    settings = get_settings()

    # Startup
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    redis = create_redis_client(settings.redis.url)
    qdrant_client = AsyncQdrantClient(url=settings.vector_store.url, api_key=settings.vector_store.api_key)
    http_client = httpx.AsyncClient()

    try:
        await redis.ping()
        logger.info("Redis connection OK")

        store = QdrantStore(
            qdrant_client,
            collection_name=settings.vector_store.collection_name,
            dimension=settings.vector_store.embedding_dimension,
        )
        await store.ensure_collection()
        logger.info("Vector store initialized")

        build_components(app, settings, redis, qdrant_client, http_client)
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        await http_client.aclose()
        await qdrant_client.close()
        await redis.aclose()
        raise

    sweeper = asyncio.create_task(
        app.state.delivery_coordinator.run_sweeper(settings.chat.cleanup_interval_seconds)
    )
    logger.info("Application startup complete: all resources initialized")

    yield

    # Shutdown
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await http_client.aclose()
    await qdrant_client.close()
    await redis.aclose()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Session-scoped news retrieval chat with real-time delivery",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.chat.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(chat_stream_router)

    @app.get("/", tags=["root"])
    async def root() -> dict:
        return {"name": SERVICE_NAME, "status": "running", "version": SERVICE_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "newsbot.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )
