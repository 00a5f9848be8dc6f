"""
Health check API endpoints.

Routes: GET /health, GET /health/redis, GET /health/vector-store, GET /health/connections

Dependencies: newsbot.boundary, newsbot.application.services.delivery_service
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from redis.asyncio import Redis

from newsbot.api.deps import get_delivery_coordinator, get_redis, get_vector_store
from newsbot.application.services.delivery_service import DeliveryCoordinator
from newsbot.boundary.vdb import QdrantStore
from newsbot.models.document import CollectionInfo
from newsbot.models.streaming import ConnectionStats

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class VectorStoreHealthResponse(HealthResponse):
    collection: CollectionInfo


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/redis", response_model=HealthResponse)
async def health_check_redis(redis: Redis = Depends(get_redis)) -> HealthResponse:
    """Redis health check."""
    try:
        await redis.ping()
    except Exception as e:
        logger.error(f"{__name__}:health_check_redis - {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Redis unavailable")
    return HealthResponse(status="healthy", message="Redis connection OK")


@router.get("/vector-store", response_model=VectorStoreHealthResponse)
async def health_check_vector_store(
    store: QdrantStore = Depends(get_vector_store),
) -> VectorStoreHealthResponse:
    """Vector store health check with collection summary."""
    info = await store.collection_info()
    if info is None:
        raise HTTPException(status_code=503, detail="Vector store unavailable")
    return VectorStoreHealthResponse(status="healthy", message="Vector store accessible", collection=info)


@router.get("/connections", response_model=ConnectionStats)
async def health_check_connections(
    coordinator: DeliveryCoordinator = Depends(get_delivery_coordinator),
) -> ConnectionStats:
    """Live WebSocket connection counts."""
    return await coordinator.stats()
