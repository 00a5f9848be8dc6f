"""
Cached embedding generator.

Turns text into a fixed-dimension vector through the Jina client, with a
Redis read-through cache keyed by a hash of the raw text. Embedding never
raises: every failure path yields the all-zero vector so retrieval degrades
instead of erroring.

Dependencies: redis.asyncio, newsbot.boundary.embeddings, newsbot.boundary.cache
System role: Embedding generation with caching
"""

import hashlib
import logging
import math
import re

from redis.asyncio import Redis

from newsbot.boundary.cache import redis_get_json, redis_set_json
from newsbot.boundary.embeddings import JinaEmbeddingClient
from newsbot.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "embedding:"

_WHITESPACE = re.compile(r"\s+")
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def embedding_cache_key(text: str) -> str:
    """Cache key for the raw (uncleaned) input text."""
    # surrogatepass: lone surrogates are legal str values after json.loads
    digest = hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest}"


class EmbeddingService:
    """
    Embedding generator with a shared Redis cache.

    Usage:
        service = EmbeddingService(redis, jina_client)
        vector = await service.embed("central bank raises rates")
        if service.is_degraded(vector):
            ...
    """

    def __init__(
        self,
        redis: Redis,
        client: JinaEmbeddingClient,
        dimension: int = 768,
        cache_ttl_seconds: int = 7 * 24 * 3600,
        max_input_chars: int = 8000,
    ) -> None:
        """
        Initialize the embedding service.

        Args:
            redis: Async Redis client used as the embedding cache
            client: Upstream embedding client
            dimension: Expected vector dimension
            cache_ttl_seconds: Lifetime of cached vectors
            max_input_chars: Upper bound on text sent upstream
        """
        self._redis = redis
        self._client = client
        self._dimension = dimension
        self._cache_ttl = cache_ttl_seconds
        self._max_input_chars = max_input_chars

    @property
    def dimension(self) -> int:
        return self._dimension

    def zero_vector(self) -> list[float]:
        return [0.0] * self._dimension

    @staticmethod
    def is_degraded(vector: list[float]) -> bool:
        """True when the vector is the all-zero fallback."""
        return all(value == 0.0 for value in vector)

    def clean_text(self, text: str) -> str:
        """Drop control characters, collapse whitespace, trim, and cap the text sent upstream."""
        text = _CONTROL.sub("", text)
        return _WHITESPACE.sub(" ", text).strip()[: self._max_input_chars]

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Raw input text

        Returns:
            list[float]: Vector of exactly ``dimension`` finite floats; the
                zero vector when the input is blank or upstream fails
        """
        cleaned = self.clean_text(text) if text else ""
        if not cleaned:
            logger.warning(f"{__name__}:embed - Empty text, returning zero vector")
            return self.zero_vector()

        cache_key = embedding_cache_key(text)
        cached = await self._read_cache(cache_key)
        if cached is not None:
            return cached

        try:
            raw = await self._client.embed(cleaned)
        except EmbeddingError as e:
            logger.error(
                f"{__name__}:embed - Upstream embedding failed: {e}",
                extra={"status_code": e.details.get("status_code")},
            )
            return self.zero_vector()
        except Exception as e:
            logger.exception(f"{__name__}:embed - Unexpected embedding failure: {type(e).__name__}: {e}")
            return self.zero_vector()

        vector = self._validate(raw)
        if vector is None:
            logger.error(
                f"{__name__}:embed - Invalid embedding response",
                extra={"response_type": type(raw).__name__},
            )
            return self.zero_vector()

        await self._write_cache(cache_key, vector)
        return vector

    def _validate(self, raw: object) -> list[float] | None:
        """Return a clean vector, or None if the shape is wrong."""
        if not isinstance(raw, list) or len(raw) != self._dimension:
            return None

        vector = []
        for value in raw:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                vector.append(0.0)
                continue
            try:
                component = float(value)
            except OverflowError:
                component = 0.0
            vector.append(component if math.isfinite(component) else 0.0)
        return vector

    async def _read_cache(self, key: str) -> list[float] | None:
        try:
            cached = await redis_get_json(self._redis, key)
        except Exception as e:
            logger.warning(f"{__name__}:_read_cache - Cache read failed: {type(e).__name__}: {e}")
            return None

        if cached is None:
            return None
        vector = self._validate(cached)
        if vector is None:
            logger.warning(f"{__name__}:_read_cache - Discarding malformed cache entry", extra={"key": key})
        return vector

    async def _write_cache(self, key: str, vector: list[float]) -> None:
        try:
            await redis_set_json(self._redis, key, vector, ttl_seconds=self._cache_ttl)
        except Exception as e:
            logger.warning(f"{__name__}:_write_cache - Cache write failed: {type(e).__name__}: {e}")
