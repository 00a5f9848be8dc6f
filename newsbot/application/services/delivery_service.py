"""
Delivery coordinator for the real-time chat channel.

Tracks live connections, attaches them to sessions, runs the chat flow for
inbound messages and delivers bot answers to every connection of a session.
Each connection owns an outbound queue drained by its own sender task, so a
slow client never holds up delivery to anyone else.

Per connection: unjoined -> joined(session_id) -> disconnected.

Every bot answer produces exactly one terminal delivery signal: a single
``message_received`` for short answers, or a ``message_stream`` sequence whose
last frame has ``isComplete=true`` for long ones.

Dependencies: newsbot.application.services.chat_service,
              newsbot.application.services.session_service, newsbot.models.streaming
System role: Delivery coordinator
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from newsbot.application.services.chat_service import ChatService, new_bot_message, new_user_message
from newsbot.application.services.session_service import SessionService
from newsbot.core.exceptions import ValidationError
from newsbot.core.validators import is_valid_session_id, validate_message_text
from newsbot.models.chat import ChatMessage
from newsbot.models.streaming import (
    ChatMessageData,
    ClientEvent,
    ClientEventType,
    ConnectionStats,
    JoinSessionData,
    MessageStreamChunk,
    StreamEvent,
    StreamEventType,
)
from newsbot.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """
    One attached client.

    Outbound events are queued; the transport's sender task drains
    ``outbox`` in order.
    """

    connection_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    outbox: asyncio.Queue = field(default_factory=asyncio.Queue)

    async def send(self, event: StreamEvent) -> None:
        await self.outbox.put(event)


class DeliveryCoordinator:
    """
    Connection registry and chat event handler.

    The registry is scoped to this instance and guarded by an asyncio.Lock;
    session state itself lives in the session store.

    Usage:
        connection = await coordinator.connect()
        await coordinator.handle_message(connection, raw_text)
        await coordinator.disconnect(connection.connection_id)
    """

    def __init__(
        self,
        sessions: SessionService,
        chat_service: ChatService,
        max_message_length: int = 1000,
        stream_threshold: int = 100,
        stream_chunk_words: int = 3,
        stream_delay_seconds: float = 0.1,
        history_limit: int = 50,
        connection_max_age_seconds: int = 24 * 3600,
    ) -> None:
        """
        Initialize delivery coordinator.

        Args:
            sessions: Session store
            chat_service: Generation mediator
            max_message_length: Maximum accepted message length
            stream_threshold: Answers longer than this are streamed
            stream_chunk_words: Words added per stream frame
            stream_delay_seconds: Pause between stream frames
            history_limit: History size sent on join
            connection_max_age_seconds: Age after which the sweep reclaims a connection's session
        """
        self._sessions = sessions
        self._chat = chat_service
        self._max_message_length = max_message_length
        self._stream_threshold = stream_threshold
        self._stream_chunk_words = stream_chunk_words
        self._stream_delay = stream_delay_seconds
        self._history_limit = history_limit
        self._max_age = timedelta(seconds=connection_max_age_seconds)

        self._connections: dict[str, Connection] = {}
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    async def connect(self, connection: Connection | None = None) -> Connection:
        connection = connection or Connection()
        async with self._lock:
            self._connections[connection.connection_id] = connection
        logger.info(f"{__name__}:connect - New connection", extra={"connection_id": connection.connection_id})
        return connection

    async def disconnect(self, connection_id: str) -> None:
        """Drop the connection record; session state is left untouched."""
        async with self._lock:
            self._connections.pop(connection_id, None)
        logger.info(f"{__name__}:disconnect - Connection closed", extra={"connection_id": connection_id})

    async def _session_connections(self, session_id: str) -> list[Connection]:
        async with self._lock:
            return [c for c in self._connections.values() if c.session_id == session_id]

    async def broadcast(self, session_id: str, event: StreamEvent) -> None:
        """Queue an event for every connection attached to the session."""
        for connection in await self._session_connections(session_id):
            await connection.send(event)

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    async def handle_message(self, connection: Connection, raw: str) -> None:
        """
        Parse and dispatch one inbound frame.

        Malformed frames produce an ``error`` event; the connection stays open.
        """
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:handle_message - Invalid JSON",
                connection_id=connection.connection_id,
                raw_data_preview=raw[:50],
            )
            await connection.send(StreamEvent.error("Invalid JSON format"))
            return

        try:
            event = ClientEvent.model_validate(payload)
        except PydanticValidationError:
            event_type = payload.get("event") if isinstance(payload, dict) else None
            logger.warning(
                f"{__name__}:handle_message - Unknown or malformed event",
                extra={"connection_id": connection.connection_id, "event_type": str(event_type)},
            )
            await connection.send(StreamEvent.error(f"Unknown or malformed event: {event_type}"))
            return

        await self.handle_event(connection, event)

    async def handle_event(self, connection: Connection, event: ClientEvent) -> None:
        if event.event is ClientEventType.JOIN_SESSION:
            await self.join_session(connection, event.data)
        elif event.event is ClientEventType.CHAT_MESSAGE:
            await self.chat_message(connection, event.data)
        elif event.event is ClientEventType.CLEAR_SESSION:
            await self.clear_session(connection)
        elif event.event is ClientEventType.GET_SESSION_INFO:
            await self.session_info(connection)

    async def join_session(self, connection: Connection, data: dict[str, Any]) -> str | None:
        """
        Attach a connection to a session, creating one if needed.

        Absent, malformed or unknown session ids get a freshly minted session.

        Returns:
            str | None: Resolved session id, or None if joining failed
        """
        try:
            requested = JoinSessionData.model_validate(data).session_id
        except PydanticValidationError:
            requested = None

        try:
            if is_valid_session_id(requested) and await self._sessions.touch(requested):
                session_id = requested
            else:
                session_id = str(uuid.uuid4())
                await self._sessions.create(session_id)

            async with self._lock:
                connection.session_id = session_id

            history = await self._sessions.history(session_id, limit=self._history_limit)
        except Exception as e:
            logger.exception(
                f"{__name__}:join_session - Failed to join session: {e}",
                extra={"connection_id": connection.connection_id},
            )
            await connection.send(StreamEvent.error("Failed to join session"))
            return None

        await connection.send(
            StreamEvent(
                event=StreamEventType.SESSION_JOINED,
                data={"sessionId": session_id, "history": [m.to_wire() for m in history]},
            )
        )
        logger.info(
            f"{__name__}:join_session - Connection joined session",
            extra={"connection_id": connection.connection_id, "session_id": session_id},
        )
        return session_id

    async def chat_message(self, connection: Connection, data: dict[str, Any]) -> None:
        """
        Run the chat flow for one inbound message.

        Flow:
        1. Validate (joined, non-empty, length)
        2. Persist and broadcast the user message
        3. Typing on, generate, persist bot message, typing off
        4. Deliver the bot message exactly once
        """
        session_id = connection.session_id
        if not session_id:
            await connection.send(StreamEvent.error("No active session"))
            return

        try:
            message_data = ChatMessageData.model_validate(data)
        except PydanticValidationError:
            await connection.send(StreamEvent.error("Invalid message format"))
            return

        try:
            text = validate_message_text(message_data.text, self._max_message_length)
        except ValidationError as e:
            await connection.send(StreamEvent.error(e.message))
            return

        typing = False
        try:
            user_message = new_user_message(text)
            await self._sessions.append_message(session_id, user_message)
            await self.broadcast(
                session_id,
                StreamEvent(event=StreamEventType.MESSAGE_RECEIVED, data=user_message.to_wire()),
            )

            await self._set_typing(session_id, True)
            typing = True
            result = await self._chat.respond(text, session_id)
            bot_message = new_bot_message(result)
            await self._sessions.append_message(session_id, bot_message)
            await self._set_typing(session_id, False)
            typing = False
        except Exception as e:
            logger.exception(
                f"{__name__}:chat_message - Failed to process message: {e}",
                extra={"session_id": session_id},
            )
            if typing:
                await self._set_typing(session_id, False)
            await connection.send(StreamEvent.error("Failed to process message"))
            return

        await self.deliver(session_id, bot_message)
        logger.info(
            f"{__name__}:chat_message - Response delivered",
            extra={
                "session_id": session_id,
                "outcome": result.outcome.value,
                "retrieved_docs": result.retrieved_docs_count,
            },
        )

    async def clear_session(self, connection: Connection) -> None:
        session_id = connection.session_id
        if not session_id:
            await connection.send(StreamEvent.error("No active session"))
            return

        try:
            await self._sessions.clear(session_id)
        except Exception as e:
            logger.error(f"{__name__}:clear_session - {type(e).__name__}: {e}", extra={"session_id": session_id})
            await connection.send(StreamEvent.error("Failed to clear session"))
            return

        await self.broadcast(
            session_id,
            StreamEvent(event=StreamEventType.SESSION_CLEARED, data={"sessionId": session_id}),
        )

    async def session_info(self, connection: Connection) -> None:
        session_id = connection.session_id
        if not session_id:
            await connection.send(
                StreamEvent(event=StreamEventType.SESSION_INFO, data={"sessionId": None, "messageCount": 0})
            )
            return

        try:
            count = await self._sessions.message_count(session_id)
        except Exception as e:
            logger.error(f"{__name__}:session_info - {type(e).__name__}: {e}", extra={"session_id": session_id})
            await connection.send(StreamEvent.error("Failed to get session info"))
            return

        await connection.send(
            StreamEvent(
                event=StreamEventType.SESSION_INFO,
                data={
                    "sessionId": session_id,
                    "messageCount": count,
                    "connectedAt": connection.connected_at.isoformat(),
                },
            )
        )

    # ------------------------------------------------------------------
    # Outbound delivery
    # ------------------------------------------------------------------

    async def _set_typing(self, session_id: str, is_typing: bool) -> None:
        await self.broadcast(
            session_id,
            StreamEvent(event=StreamEventType.BOT_TYPING, data={"isTyping": is_typing}),
        )

    async def deliver(self, session_id: str, message: ChatMessage) -> None:
        """Send a bot message directly or as a stream, never both."""
        if len(message.content) <= self._stream_threshold:
            await self.broadcast(
                session_id,
                StreamEvent(event=StreamEventType.MESSAGE_RECEIVED, data=message.to_wire()),
            )
        else:
            await self._stream(session_id, message)

    async def _stream(self, session_id: str, message: ChatMessage) -> None:
        words = message.content.split(" ")
        size = self._stream_chunk_words

        for start in range(0, len(words), size):
            is_complete = start + size >= len(words)
            chunk = MessageStreamChunk(
                id=message.id,
                type=message.type,
                content=" ".join(words[: start + size]),
                timestamp=message.timestamp,
                sources=message.sources if is_complete else [],
                is_complete=is_complete,
                retrieved_docs=message.retrieved_docs,
            )
            await self.broadcast(
                session_id,
                StreamEvent(event=StreamEventType.MESSAGE_STREAM, data=chunk.to_wire()),
            )
            if not is_complete:
                await asyncio.sleep(self._stream_delay)

    async def broadcast_system_message(self, content: str) -> None:
        """Send a ``system_message`` to every live connection."""
        event = StreamEvent(
            event=StreamEventType.SYSTEM_MESSAGE,
            data={"content": content, "timestamp": datetime.now(timezone.utc).isoformat()},
        )
        async with self._lock:
            connections = list(self._connections.values())
        for connection in connections:
            await connection.send(event)
        logger.info(f"{__name__}:broadcast_system_message - Broadcast to {len(connections)} connections")

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def stats(self) -> ConnectionStats:
        async with self._lock:
            connections = list(self._connections.values())
        joined = [c.session_id for c in connections if c.session_id]
        return ConnectionStats(
            total_connections=len(connections),
            active_sessions=len(set(joined)),
            connections_with_sessions=len(joined),
        )

    async def sweep_inactive(self, now: datetime | None = None) -> int:
        """
        Delete the sessions of connections older than the maximum age.

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            int: Number of connection records reclaimed
        """
        cutoff = (now or datetime.now(timezone.utc)) - self._max_age
        async with self._lock:
            stale = [c for c in self._connections.values() if c.session_id and c.connected_at < cutoff]
            for connection in stale:
                self._connections.pop(connection.connection_id, None)

        cleaned = 0
        for connection in stale:
            session_id, connection.session_id = connection.session_id, None
            try:
                await self._sessions.delete(session_id)
                cleaned += 1
            except Exception as e:
                logger.error(
                    f"{__name__}:sweep_inactive - Failed to delete session: {e}",
                    extra={"session_id": session_id},
                )

        if cleaned:
            logger.info(f"{__name__}:sweep_inactive - Cleaned up {cleaned} inactive sessions")
        return cleaned

    async def run_sweeper(self, interval_seconds: float = 3600) -> None:
        """Run ``sweep_inactive`` forever; cancel the task to stop it."""
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.sweep_inactive()
            except Exception as e:
                logger.exception(f"{__name__}:run_sweeper - Sweep failed: {e}")
