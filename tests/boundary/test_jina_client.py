"""
Test suite for JinaEmbeddingClient.

Uses httpx.MockTransport so no network calls are made.

System role: Verification of the embedding provider adapter
"""

import json

import httpx
import pytest

from newsbot.boundary.embeddings import JinaEmbeddingClient
from newsbot.core.exceptions import EmbeddingError

API_URL = "https://api.jina.ai/v1/embeddings"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestEmbed:
    @pytest.mark.asyncio
    async def test_posts_request_and_returns_embedding(self):
        # Arrange
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2]}]})

        async with _client(handler) as http:
            client = JinaEmbeddingClient(http, api_key="secret")

            # Act
            embedding = await client.embed("hello")

        # Assert
        assert embedding == [0.1, 0.2]
        assert seen["auth"] == "Bearer secret"
        assert seen["body"] == {"model": "jina-embeddings-v2-base-en", "input": ["hello"]}

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        async with _client(lambda request: httpx.Response(200)) as http:
            client = JinaEmbeddingClient(http, api_key=None)

            with pytest.raises(EmbeddingError):
                await client.embed("hello")

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        async with _client(lambda request: httpx.Response(429, text="rate limited")) as http:
            client = JinaEmbeddingClient(http, api_key="secret")

            with pytest.raises(EmbeddingError) as exc_info:
                await client.embed("hello")

        assert exc_info.value.details["status_code"] == 429

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self):
        async with _client(lambda request: httpx.Response(200, json={"data": []})) as http:
            client = JinaEmbeddingClient(http, api_key="secret")

            with pytest.raises(EmbeddingError):
                await client.embed("hello")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as http:
            client = JinaEmbeddingClient(http, api_key="secret")

            with pytest.raises(EmbeddingError):
                await client.embed("hello")
