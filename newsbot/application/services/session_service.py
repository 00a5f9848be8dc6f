"""
Session service orchestrator.

Redis-backed conversation state: one JSON metadata key per session plus a
bounded message list stored newest-first. Every write refreshes the TTL of
both keys, and ``messageCount`` is always recomputed from the trimmed list
length rather than incremented.

Keys:
    session:{id}            JSON SessionRecord
    session:{id}:messages   list of JSON ChatMessage, newest at head

Dependencies: redis.asyncio, newsbot.boundary.cache, newsbot.models
System role: Session store
"""

import json
import logging
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError as PydanticValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from newsbot.boundary.cache import redis_delete, redis_get_json, redis_set_json
from newsbot.core.exceptions import SessionStoreError
from newsbot.models.chat import ChatMessage, SearchResultGroup
from newsbot.models.session import SessionExport, SessionRecord, SessionStats

logger = logging.getLogger(__name__)


def session_key(session_id: str) -> str:
    return f"session:{session_id}"


def messages_key(session_id: str) -> str:
    return f"session:{session_id}:messages"


class SessionService:
    """
    Session store over Redis.

    Storage failures are raised as SessionStoreError; they are never
    swallowed, since silently losing conversation state would break the
    message-count invariant.
    """

    def __init__(
        self,
        redis: Redis,
        ttl_seconds: int = 24 * 3600,
        max_messages: int = 200,
    ) -> None:
        """
        Initialize session service.

        Args:
            redis: Async Redis client (``decode_responses=True``)
            ttl_seconds: Session lifetime, refreshed on every write
            max_messages: Size of the bounded message log
        """
        self._redis = redis
        self._ttl = ttl_seconds
        self._max_messages = max_messages

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    async def create(self, session_id: str) -> SessionRecord:
        """
        Create (or reset) a session with an empty message log.

        Args:
            session_id: Session UUID string

        Returns:
            SessionRecord: Fresh metadata

        Raises:
            SessionStoreError: If Redis fails
        """
        now = datetime.now(timezone.utc)
        record = SessionRecord(id=session_id, created_at=now, last_activity=now, message_count=0)
        try:
            await redis_delete(self._redis, messages_key(session_id))
            await self._save(record)
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to create session: {e}", session_id=session_id, operation="create"
            ) from e

        logger.info(f"{__name__}:create - Created session", extra={"session_id": session_id})
        return record

    async def exists(self, session_id: str) -> bool:
        try:
            return await self._redis.exists(session_key(session_id)) == 1
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to check session: {e}", session_id=session_id, operation="exists"
            ) from e

    async def get(self, session_id: str) -> SessionRecord | None:
        """
        Fetch session metadata with the live message count.

        Returns:
            SessionRecord | None: Metadata, or None if the session is absent
        """
        try:
            record = await self._load(session_id)
            if record is None:
                return None
            count = await self._redis.llen(messages_key(session_id))
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to get session: {e}", session_id=session_id, operation="get"
            ) from e
        return record.model_copy(update={"message_count": count})

    async def touch(self, session_id: str) -> bool:
        """
        Refresh ``lastActivity`` and the TTL of both session keys.

        Returns:
            bool: False if the session does not exist
        """
        try:
            record = await self._load(session_id)
            if record is None:
                return False
            await self._save(record.model_copy(update={"last_activity": datetime.now(timezone.utc)}))
            await self._redis.expire(messages_key(session_id), self._ttl)
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to touch session: {e}", session_id=session_id, operation="touch"
            ) from e
        return True

    # ------------------------------------------------------------------
    # Message log
    # ------------------------------------------------------------------

    async def append_message(self, session_id: str, message: ChatMessage) -> int:
        """
        Push a message onto the bounded log.

        Steps:
        1. LPUSH the message at the head
        2. LTRIM to the most recent ``max_messages``
        3. LLEN the trimmed list
        4. Write metadata with ``messageCount`` = trimmed length

        Args:
            session_id: Session UUID string
            message: Message to persist

        Returns:
            int: Message count after trimming

        Raises:
            SessionStoreError: If Redis fails
        """
        key = messages_key(session_id)
        try:
            await self._redis.lpush(key, json.dumps(message.to_wire(), ensure_ascii=False))
            await self._redis.ltrim(key, 0, self._max_messages - 1)
            count = await self._redis.llen(key)
            await self._redis.expire(key, self._ttl)

            now = datetime.now(timezone.utc)
            record = await self._load(session_id)
            if record is None:
                record = SessionRecord(id=session_id, created_at=now, last_activity=now)
            await self._save(record.model_copy(update={"message_count": count, "last_activity": now}))
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to add message: {e}", session_id=session_id, operation="append_message"
            ) from e

        logger.debug(
            f"{__name__}:append_message - Added {message.type.value} message",
            extra={"session_id": session_id, "message_count": count},
        )
        return count

    async def history(self, session_id: str, limit: int = 50) -> list[ChatMessage]:
        """
        Most recent messages, oldest first.

        Args:
            session_id: Session UUID string
            limit: Maximum number of messages; ``<= 0`` returns an empty list

        Returns:
            list[ChatMessage]: At most ``limit`` messages in insertion order
        """
        if limit <= 0:
            return []
        try:
            raw_messages = await self._redis.lrange(messages_key(session_id), 0, limit - 1)
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to get history: {e}", session_id=session_id, operation="history"
            ) from e

        messages = self._parse_messages(raw_messages, session_id)
        messages.reverse()
        return messages

    async def message_count(self, session_id: str) -> int:
        try:
            return await self._redis.llen(messages_key(session_id))
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to count messages: {e}", session_id=session_id, operation="message_count"
            ) from e

    async def clear(self, session_id: str) -> None:
        """Wipe the message log; metadata (including ``createdAt``) is kept."""
        try:
            await redis_delete(self._redis, messages_key(session_id))
            record = await self._load(session_id)
            if record is not None:
                await self._save(
                    record.model_copy(
                        update={"message_count": 0, "last_activity": datetime.now(timezone.utc)}
                    )
                )
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to clear session: {e}", session_id=session_id, operation="clear"
            ) from e
        logger.info(f"{__name__}:clear - Cleared session", extra={"session_id": session_id})

    async def delete(self, session_id: str) -> None:
        try:
            await redis_delete(self._redis, session_key(session_id), messages_key(session_id))
        except RedisError as e:
            raise SessionStoreError(
                f"Failed to delete session: {e}", session_id=session_id, operation="delete"
            ) from e
        logger.info(f"{__name__}:delete - Deleted session", extra={"session_id": session_id})

    # ------------------------------------------------------------------
    # Cross-session queries
    # ------------------------------------------------------------------

    async def list_active(self) -> list[SessionRecord]:
        """All live sessions, most recently active first."""
        try:
            keys = await self._redis.keys("session:*")
            sessions = []
            for key in keys:
                if key.endswith(":messages"):
                    continue
                record = await self._load(key.removeprefix("session:"))
                if record is not None:
                    sessions.append(record)
        except RedisError as e:
            raise SessionStoreError(f"Failed to list sessions: {e}", operation="list_active") from e

        sessions.sort(key=lambda s: s.last_activity, reverse=True)
        return sessions

    async def stats(self) -> SessionStats:
        """Counts of live sessions and their recent activity."""
        sessions = await self.list_active()
        now = datetime.now(timezone.utc)

        total_messages = sum(s.message_count for s in sessions)
        return SessionStats(
            total_sessions=len(sessions),
            active_last_hour=sum(1 for s in sessions if now - s.last_activity <= timedelta(hours=1)),
            active_last_day=sum(1 for s in sessions if now - s.last_activity <= timedelta(days=1)),
            total_messages=total_messages,
            average_messages_per_session=round(total_messages / len(sessions), 2) if sessions else 0.0,
        )

    async def export(self, session_id: str) -> SessionExport | None:
        """Session metadata plus its complete message log, or None if absent."""
        record = await self.get(session_id)
        if record is None:
            return None
        messages = await self.history(session_id, limit=self._max_messages)
        return SessionExport(session=record, messages=messages, exported_at=datetime.now(timezone.utc))

    async def search_messages(self, query: str, limit: int = 20) -> list[SearchResultGroup]:
        """
        Case-insensitive substring search across every live session.

        Args:
            query: Search text
            limit: Maximum number of matching messages in total

        Returns:
            list[SearchResultGroup]: Matches grouped per session
        """
        needle = query.lower()
        remaining = limit
        groups: list[SearchResultGroup] = []

        for record in await self.list_active():
            if remaining <= 0:
                break
            matches = [
                message
                for message in await self.history(record.id, limit=self._max_messages)
                if needle in message.content.lower()
            ][:remaining]
            if matches:
                groups.append(SearchResultGroup(session_id=record.id, messages=matches))
                remaining -= len(matches)

        return groups

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, session_id: str) -> SessionRecord | None:
        data = await redis_get_json(self._redis, session_key(session_id))
        if data is None:
            return None
        try:
            return SessionRecord.model_validate(data)
        except PydanticValidationError:
            logger.warning(f"{__name__}:_load - Malformed session metadata", extra={"session_id": session_id})
            return None

    async def _save(self, record: SessionRecord) -> None:
        await redis_set_json(self._redis, session_key(record.id), record.to_wire(), ttl_seconds=self._ttl)

    def _parse_messages(self, raw_messages: list[str], session_id: str) -> list[ChatMessage]:
        messages = []
        for raw in raw_messages:
            try:
                messages.append(ChatMessage.model_validate_json(raw))
            except PydanticValidationError:
                logger.warning(
                    f"{__name__}:_parse_messages - Skipping malformed message",
                    extra={"session_id": session_id},
                )
        return messages
