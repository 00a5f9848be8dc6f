"""
Test suite for GeminiGenerator.

The chat model is replaced with a mock exposing ``ainvoke``.

System role: Verification of the generation adapter
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from newsbot.core.exceptions import GenerationError
from newsbot.core.generation import GeminiGenerator
from newsbot.core.generation.gemini_generator import extract_text


@pytest.fixture
def mock_model() -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="  The answer.  "))
    return model


class TestGenerate:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self, mock_model):
        generator = GeminiGenerator(model=mock_model)

        text = await generator.generate("prompt")

        assert text == "The answer."
        mock_model.ainvoke.assert_awaited_once_with("prompt")

    @pytest.mark.asyncio
    async def test_empty_response_raises(self, mock_model):
        mock_model.ainvoke = AsyncMock(return_value=AIMessage(content=""))
        generator = GeminiGenerator(model=mock_model)

        with pytest.raises(GenerationError):
            await generator.generate("prompt")

    @pytest.mark.asyncio
    async def test_upstream_exception_propagates(self, mock_model):
        mock_model.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        generator = GeminiGenerator(model=mock_model)

        with pytest.raises(RuntimeError):
            await generator.generate("prompt")


class TestExtractText:
    def test_string(self):
        assert extract_text("plain") == "plain"

    def test_content_parts(self):
        content = [{"type": "text", "text": "Hello "}, "world", {"type": "image"}]

        assert extract_text(content) == "Hello world"

    def test_none(self):
        assert extract_text(None) == ""
