"""
Test doubles shared across the suite.

Provides: InMemoryRedis (async subset of redis.asyncio.Redis used by the
session store and the embedding cache), helpers for building domain objects.
"""

from __future__ import annotations

import fnmatch

from newsbot.models.document import RetrievedDocument


def _bounds(n: int, start: int, stop: int) -> tuple[int, int]:
    """Redis-style inclusive [start, stop] with negative indices, as a Python slice."""
    s = start + n if start < 0 else start
    e = stop + n if stop < 0 else stop
    s = max(s, 0)
    e = min(e, n - 1)
    return s, e + 1


class InMemoryRedis:
    """
    Minimal async Redis fake.

    Strings and lists are kept in separate maps; TTLs are recorded but never
    expire keys.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lists: dict[str, list[str]] = {}
        self.ttls: dict[str, int] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            from redis.exceptions import ConnectionError

            raise ConnectionError("redis unavailable")

    async def ping(self) -> bool:
        self._check()
        return True

    async def get(self, key: str):
        self._check()
        return self._data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None):
        self._check()
        self._data[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def exists(self, *keys: str) -> int:
        self._check()
        return sum(1 for key in keys if key in self._data or key in self._lists)

    async def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
            if self._lists.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def expire(self, key: str, seconds: int) -> bool:
        self._check()
        if key in self._data or key in self._lists:
            self.ttls[key] = seconds
            return True
        return False

    async def keys(self, pattern: str) -> list[str]:
        self._check()
        names = list(self._data) + list(self._lists)
        return [k for k in names if fnmatch.fnmatch(k, pattern)]

    async def lpush(self, key: str, *values: str) -> int:
        self._check()
        lst = self._lists.setdefault(key, [])
        for value in values:
            lst.insert(0, str(value))
        return len(lst)

    async def ltrim(self, key: str, start: int, stop: int) -> bool:
        self._check()
        lst = self._lists.get(key, [])
        s, e = _bounds(len(lst), start, stop)
        self._lists[key] = lst[s:e] if s < e else []
        if not self._lists[key]:
            self._lists.pop(key, None)
        return True

    async def lrange(self, key: str, start: int, stop: int) -> list[str]:
        self._check()
        lst = self._lists.get(key, [])
        s, e = _bounds(len(lst), start, stop)
        return lst[s:e] if s < e else []

    async def llen(self, key: str) -> int:
        self._check()
        return len(self._lists.get(key, []))

    async def aclose(self) -> None:
        return None


def make_document(index: int = 1, url: str | None = None, **overrides) -> RetrievedDocument:
    fields = {
        "content": f"Article body number {index} about markets.",
        "title": f"Headline {index}",
        "url": url or f"https://news.example.com/{index}",
        "source": "Example News",
        "published_at": "2024-03-05T10:00:00Z",
        "similarity_score": 0.9 - index * 0.01,
    }
    fields.update(overrides)
    return RetrievedDocument(**fields)
