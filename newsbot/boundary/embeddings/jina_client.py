"""
Jina embeddings HTTP client.

Thin async wrapper around the Jina ``/v1/embeddings`` endpoint. Returns the
raw embedding payload; dimension checks and value cleaning are the caller's
concern.

Dependencies: httpx, newsbot.core.exceptions
System role: Embedding provider adapter
"""

import logging
from typing import Any

import httpx

from newsbot.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class JinaEmbeddingClient:
    """Async client for the Jina embeddings API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        model: str = "jina-embeddings-v2-base-en",
        api_url: str = "https://api.jina.ai/v1/embeddings",
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared httpx client (owned by the application lifespan)
            api_key: Jina API key; requests are refused when missing
            model: Embedding model name
            api_url: Embeddings endpoint URL
            timeout_seconds: Per-request timeout
        """
        self._http = http_client
        self._api_key = api_key
        self._model = model
        self._api_url = api_url
        self._timeout = timeout_seconds

    @property
    def is_configured(self) -> bool:
        """True when an API key is available."""
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def embed(self, text: str) -> Any:
        """
        Request an embedding for a single text.

        Args:
            text: Already-cleaned input text

        Returns:
            The ``data[0].embedding`` value from the response, unvalidated

        Raises:
            EmbeddingError: On missing credentials, transport failure,
                non-2xx status, or a response without an embedding
        """
        if not self.is_configured:
            raise EmbeddingError("Jina API key is not configured")

        try:
            response = await self._http.post(
                self._api_url,
                json={"model": self._model, "input": [text]},
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise EmbeddingError(
                f"Embedding request failed: {type(exc).__name__}: {exc}",
            ) from exc

        if response.status_code >= 400:
            raise EmbeddingError(
                "Embedding request rejected",
                status_code=response.status_code,
                details={"response_preview": response.text[:200]},
            )

        try:
            body = response.json()
            return body["data"][0]["embedding"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise EmbeddingError(
                f"Malformed embedding response: {type(exc).__name__}",
                status_code=response.status_code,
            ) from exc
