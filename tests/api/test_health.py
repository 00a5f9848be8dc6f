"""
Test suite for health check endpoints.

System role: Verification of health HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from newsbot.api.deps import get_delivery_coordinator, get_redis, get_vector_store
from newsbot.api.routers.health import router
from newsbot.models.document import CollectionInfo
from newsbot.models.streaming import ConnectionStats


@pytest.fixture
def app(fake_redis, mock_vector_store) -> FastAPI:
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_vector_store] = lambda: mock_vector_store
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_redis(client):
    response = client.get("/api/v1/health/redis")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Redis connection OK"}


def test_health_check_redis_down(client, fake_redis):
    fake_redis.fail = True

    assert client.get("/api/v1/health/redis").status_code == 503


def test_health_check_vector_store(client, mock_vector_store):
    mock_vector_store.collection_info = AsyncMock(
        return_value=CollectionInfo(points_count=5, indexed_vectors_count=5, status="green")
    )

    response = client.get("/api/v1/health/vector-store")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["collection"]["pointsCount"] == 5


def test_health_check_vector_store_down(client):
    assert client.get("/api/v1/health/vector-store").status_code == 503


def test_health_check_connections(app, client):
    coordinator = MagicMock()
    coordinator.stats = AsyncMock(
        return_value=ConnectionStats(total_connections=3, active_sessions=1, connections_with_sessions=2)
    )
    app.dependency_overrides[get_delivery_coordinator] = lambda: coordinator

    response = client.get("/api/v1/health/connections")

    assert response.status_code == 200
    assert response.json() == {"totalConnections": 3, "activeSessions": 1, "connectionsWithSessions": 2}
