"""
Gemini text generator.

Prompt string in, answer string out. Wraps ChatGoogleGenerativeAI and
normalises its message content (plain string or list of content parts) into
text.

Dependencies: langchain_google_genai, langchain_core
System role: Generation capability adapter
"""

import logging
from typing import Any

from langchain_google_genai import ChatGoogleGenerativeAI

from newsbot.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


def extract_text(content: Any) -> str:
    """Flatten LangChain message content into a single string."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class GeminiGenerator:
    """Single-turn text generation with Gemini."""

    def __init__(
        self,
        model_id: str = "gemini-1.5-flash",
        temperature: float = 0.3,
        api_key: str | None = None,
        model: ChatGoogleGenerativeAI | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            model_id: Gemini model name
            temperature: Sampling temperature
            api_key: Google API key; falls back to the GOOGLE_API_KEY env var
            model: Optional prebuilt chat model
        """
        self._model_id = model_id
        if model is None:
            kwargs: dict[str, Any] = {"model": model_id, "temperature": temperature}
            if api_key:
                kwargs["google_api_key"] = api_key
            model = ChatGoogleGenerativeAI(**kwargs)
        self._model = model

    @property
    def model_id(self) -> str:
        return self._model_id

    async def generate(self, prompt: str) -> str:
        """
        Generate an answer for a prompt.

        Args:
            prompt: Complete prompt text

        Returns:
            str: Answer text

        Raises:
            GenerationError: If the model returns no text
        """
        logger.debug(f"{__name__}:generate - Invoking {self._model_id}", extra={"prompt_length": len(prompt)})
        response = await self._model.ainvoke(prompt)
        text = extract_text(getattr(response, "content", None)).strip()
        if not text:
            raise GenerationError("Invalid response from generation model: empty content")
        return text
