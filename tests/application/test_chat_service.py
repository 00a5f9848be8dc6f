"""
Test suite for ChatService.

Tests the retrieve -> prompt -> generate flow, the explicit outcomes, and the
request/response persistence path. Retriever and generator are mocked; the
session store runs on the in-memory Redis.

System role: Verification of the generation mediator
"""

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from newsbot.application.services.chat_service import (
    FALLBACK_TEXT,
    INVALID_QUERY_TEXT,
    NO_RESULTS_TEXT,
    ChatService,
    new_bot_message,
    new_user_message,
    unique_sources,
)
from newsbot.core.exceptions import GenerationError, SessionNotFoundError
from newsbot.models.chat import MessageType
from newsbot.models.generation import GenerationOutcome


@pytest.fixture
def mock_retriever(sample_documents) -> MagicMock:
    retriever = MagicMock()
    retriever.retrieve = AsyncMock(return_value=sample_documents)
    return retriever


@pytest.fixture
def mock_generator() -> MagicMock:
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="Rates went up.")
    return generator


@pytest.fixture
def chat_service(mock_retriever, mock_generator, session_service) -> ChatService:
    return ChatService(mock_retriever, mock_generator, session_service)


@pytest.fixture
async def session_id(session_service) -> str:
    sid = str(uuid.uuid4())
    await session_service.create(sid)
    return sid


class TestRespond:
    """Tests for ChatService.respond."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query(self, chat_service, mock_retriever, query):
        result = await chat_service.respond(query, "any")

        assert result.text == INVALID_QUERY_TEXT
        assert result.outcome is GenerationOutcome.INVALID_QUERY
        assert not result.is_error
        mock_retriever.retrieve.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_documents(self, chat_service, mock_retriever, mock_generator):
        mock_retriever.retrieve = AsyncMock(return_value=[])

        result = await chat_service.respond("markets", "any")

        assert result.text == NO_RESULTS_TEXT
        assert result.outcome is GenerationOutcome.NO_RESULTS
        assert result.sources == []
        assert not result.is_error
        mock_generator.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_success(self, chat_service, mock_generator, session_id):
        # Act
        result = await chat_service.respond("What happened to rates?", session_id)

        # Assert
        assert result.text == "Rates went up."
        assert result.outcome is GenerationOutcome.OK
        assert result.retrieved_docs_count == 3
        assert [s.url for s in result.sources] == [
            "https://news.example.com/1",
            "https://news.example.com/2",
        ]
        prompt = mock_generator.generate.await_args.args[0]
        assert "User Query: What happened to rates?" in prompt
        assert "Document 1:" in prompt

    @pytest.mark.asyncio
    async def test_prompt_includes_recent_history(self, chat_service, mock_generator, session_service, session_id):
        # Arrange
        for i in range(12):
            await session_service.append_message(session_id, new_user_message(f"earlier question {i}"))

        # Act
        await chat_service.respond("latest", session_id)

        # Assert
        prompt = mock_generator.generate.await_args.args[0]
        assert "user: earlier question 11" in prompt
        assert "user: earlier question 2" in prompt
        assert "earlier question 1\n" not in prompt

    @pytest.mark.asyncio
    async def test_generation_failure_returns_fallback(self, chat_service, mock_generator, session_id):
        mock_generator.generate = AsyncMock(side_effect=GenerationError("empty response"))

        result = await chat_service.respond("markets", session_id)

        assert result.text == FALLBACK_TEXT
        assert result.outcome is GenerationOutcome.UPSTREAM_FAILURE
        assert result.is_error
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_generation_timeout_returns_fallback(self, mock_retriever, session_service, session_id):
        # Arrange
        async def slow(prompt):
            await asyncio.sleep(1)
            return "late"

        generator = MagicMock()
        generator.generate = slow
        service = ChatService(mock_retriever, generator, session_service, timeout_seconds=0.01)

        # Act
        result = await service.respond("markets", session_id)

        # Assert
        assert result.outcome is GenerationOutcome.UPSTREAM_FAILURE
        assert result.text == FALLBACK_TEXT


class TestProcessChat:
    """Tests for the request/response chat flow."""

    @pytest.mark.asyncio
    async def test_persists_user_and_bot_messages(self, chat_service, session_service, session_id):
        # Act
        user_message, bot_message = await chat_service.process_chat(session_id, "rates?")

        # Assert
        assert user_message.type is MessageType.USER
        assert bot_message.type is MessageType.BOT
        assert bot_message.retrieved_docs == 3
        history = await session_service.history(session_id)
        assert [m.id for m in history] == [user_message.id, bot_message.id]
        assert (await session_service.get(session_id)).message_count == 2

    @pytest.mark.asyncio
    async def test_missing_session_raises(self, chat_service):
        with pytest.raises(SessionNotFoundError):
            await chat_service.process_chat(str(uuid.uuid4()), "rates?")

    @pytest.mark.asyncio
    async def test_failure_marks_bot_message_as_error(self, chat_service, mock_generator, session_id):
        mock_generator.generate = AsyncMock(side_effect=RuntimeError("quota"))

        _, bot_message = await chat_service.process_chat(session_id, "rates?")

        assert bot_message.is_error
        assert bot_message.content == FALLBACK_TEXT


class TestHelpers:
    def test_unique_sources_keeps_first_seen_order(self, sample_documents):
        sources = unique_sources(sample_documents)

        assert [s.title for s in sources] == ["Headline 1", "Headline 2"]

    def test_no_results_bot_message_is_not_error(self):
        from newsbot.models.generation import GenerationResult

        message = new_bot_message(GenerationResult(text=NO_RESULTS_TEXT, outcome=GenerationOutcome.NO_RESULTS))

        assert not message.is_error
