"""
Test suite for the WebSocket chat channel.

Exercises the full socket loop through TestClient; the coordinator is placed
on ``app.state`` the way the application lifespan does it.

System role: Verification of WebSocket streaming API
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from newsbot.api.routers.chat_stream import router
from newsbot.application.services.delivery_service import DeliveryCoordinator
from newsbot.models.generation import GenerationResult

LONG_ANSWER = " ".join(f"word{i}" for i in range(40))


@pytest.fixture
def mock_chat_service() -> MagicMock:
    chat = MagicMock()
    chat.respond = AsyncMock(return_value=GenerationResult(text="Short answer.", retrieved_docs_count=1))
    return chat


@pytest.fixture
def client(session_service, mock_chat_service) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.state.delivery_coordinator = DeliveryCoordinator(
        session_service, mock_chat_service, stream_delay_seconds=0
    )
    return TestClient(app)


def _join(ws) -> str:
    ws.send_json({"event": "join_session", "data": {}})
    event = ws.receive_json()
    assert event["event"] == "session_joined"
    return event["data"]["sessionId"]


class TestWebSocketChat:
    def test_join_creates_session(self, client):
        with client.websocket_connect("/ws/chat") as ws:
            session_id = _join(ws)

        uuid.UUID(session_id)

    def test_short_answer_round_trip(self, client):
        with client.websocket_connect("/ws/chat") as ws:
            # Arrange
            _join(ws)

            # Act
            ws.send_json({"event": "chat_message", "data": {"message": "What about rates?"}})
            events = [ws.receive_json() for _ in range(4)]

        # Assert
        assert [e["event"] for e in events] == ["message_received", "bot_typing", "bot_typing", "message_received"]
        assert events[0]["data"]["content"] == "What about rates?"
        assert events[3]["data"]["content"] == "Short answer."

    def test_long_answer_streams_until_complete(self, client, mock_chat_service):
        mock_chat_service.respond = AsyncMock(return_value=GenerationResult(text=LONG_ANSWER))

        with client.websocket_connect("/ws/chat") as ws:
            _join(ws)
            ws.send_json({"event": "chat_message", "data": {"message": "Everything please"}})
            for _ in range(3):
                ws.receive_json()
            chunks = []
            while not chunks or not chunks[-1]["isComplete"]:
                event = ws.receive_json()
                assert event["event"] == "message_stream"
                chunks.append(event["data"])

        assert len(chunks) == 14
        assert chunks[-1]["content"] == LONG_ANSWER

    def test_invalid_json_keeps_connection_open(self, client):
        with client.websocket_connect("/ws/chat") as ws:
            ws.send_text("{broken")
            assert ws.receive_json() == {"event": "error", "data": {"message": "Invalid JSON format"}}

            ws.send_json({"event": "get_session_info"})
            assert ws.receive_json() == {"event": "session_info", "data": {"sessionId": None, "messageCount": 0}}

    def test_rejoin_after_reconnect_restores_history(self, client):
        with client.websocket_connect("/ws/chat") as ws:
            session_id = _join(ws)
            ws.send_json({"event": "chat_message", "data": {"message": "remember me"}})
            for _ in range(4):
                ws.receive_json()

        with client.websocket_connect("/ws/chat") as ws:
            ws.send_json({"event": "join_session", "data": {"sessionId": session_id}})
            event = ws.receive_json()

        assert event["data"]["sessionId"] == session_id
        assert [m["content"] for m in event["data"]["history"]] == ["remember me", "Short answer."]
