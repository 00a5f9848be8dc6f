"""
Chat service for retrieval-augmented news Q&A.

Mediates a single question: retrieve documents, assemble the prompt with
recent history, call the generation model under a time budget, and return a
uniform GenerationResult. Every failure is converted into a fixed fallback
answer with an explicit outcome; ``respond`` never raises.

Dependencies: newsbot.application.retrieval_service, newsbot.core.prompt_builder,
              newsbot.core.generation, newsbot.application.services.session_service
System role: Generation mediator
"""

import asyncio
import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from newsbot.application.retrieval_service import RetrievalService
from newsbot.application.services.session_service import SessionService
from newsbot.core.exceptions import SessionNotFoundError
from newsbot.core.generation import GeminiGenerator
from newsbot.core.prompt_builder import build_context, build_prompt
from newsbot.models.chat import ChatMessage, MessageType, SourceReference
from newsbot.models.document import RetrievedDocument
from newsbot.models.generation import GenerationOutcome, GenerationResult
from newsbot.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

INVALID_QUERY_TEXT = "Please enter a valid query."
NO_RESULTS_TEXT = "No relevant news found. Try rephrasing your query."
FALLBACK_TEXT = (
    "I'm sorry, I encountered an error while processing your question. "
    "Please try again or rephrase your query."
)


def unique_sources(documents: Sequence[RetrievedDocument]) -> list[SourceReference]:
    """Documents reduced to source references, deduplicated by url in first-seen order."""
    seen: dict[str, SourceReference] = {}
    for doc in documents:
        if doc.url not in seen:
            seen[doc.url] = SourceReference(
                title=doc.title,
                url=doc.url,
                source=doc.source,
                published_at=doc.published_at,
            )
    return list(seen.values())


def new_user_message(content: str) -> ChatMessage:
    return ChatMessage(
        id=str(uuid.uuid4()),
        type=MessageType.USER,
        content=content,
        timestamp=datetime.now(timezone.utc),
    )


def new_bot_message(result: GenerationResult) -> ChatMessage:
    """Bot message for a mediator result; ``isError`` mirrors the outcome."""
    return ChatMessage(
        id=str(uuid.uuid4()),
        type=MessageType.BOT,
        content=result.text,
        timestamp=datetime.now(timezone.utc),
        sources=result.sources,
        retrieved_docs=result.retrieved_docs_count,
        is_error=result.is_error,
    )


class ChatService:
    """
    Chat service for news Q&A.

    Coordinates retrieval, prompt assembly and generation for one question.
    Session persistence of the surrounding messages is done by the caller
    (``process_chat`` for request/response, the delivery coordinator for the
    WebSocket channel).
    """

    def __init__(
        self,
        retriever: RetrievalService,
        generator: GeminiGenerator,
        sessions: SessionService,
        history_window: int = 10,
        timeout_seconds: float = 60.0,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retriever: Query-to-documents retrieval
            generator: Text generation adapter
            sessions: Session store used for conversation history
            history_window: Number of history entries included in the prompt
            timeout_seconds: Budget for the generation call
        """
        self._retriever = retriever
        self._generator = generator
        self._sessions = sessions
        self._history_window = history_window
        self._timeout = timeout_seconds

    async def respond(self, query: str, session_id: str) -> GenerationResult:
        """
        Answer a question for a session.

        Flow:
        1. Reject blank queries
        2. Retrieve documents; none found is a normal outcome
        3. Build context and prompt with the last ``history_window`` messages
        4. Generate under the timeout budget

        Args:
            query: User question
            session_id: Session whose history is used

        Returns:
            GenerationResult: Answer text, sources and outcome
        """
        if not query or not query.strip():
            return GenerationResult(text=INVALID_QUERY_TEXT, outcome=GenerationOutcome.INVALID_QUERY)

        try:
            documents = await self._retriever.retrieve(query)
            if not documents:
                return GenerationResult(text=NO_RESULTS_TEXT, outcome=GenerationOutcome.NO_RESULTS)

            context = build_context(documents)
            history = await self._sessions.history(session_id, limit=self._history_window)
            prompt = build_prompt(query, context, history)

            text = await asyncio.wait_for(self._generator.generate(prompt), timeout=self._timeout)

            logger.info(
                f"{__name__}:respond - Response generated",
                extra={"session_id": session_id, "retrieved_docs": len(documents)},
            )
            return GenerationResult(
                text=text,
                sources=unique_sources(documents),
                retrieved_docs_count=len(documents),
                outcome=GenerationOutcome.OK,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:respond - Generation failed",
                e,
                session_id=session_id,
                query=query,
            )
            return GenerationResult(text=FALLBACK_TEXT, outcome=GenerationOutcome.UPSTREAM_FAILURE)

    async def process_chat(self, session_id: str, message: str) -> tuple[ChatMessage, ChatMessage]:
        """
        Request/response chat flow.

        Flow:
        1. Validate session exists
        2. Persist user message
        3. Generate answer
        4. Persist bot message

        Args:
            session_id: Session UUID string
            message: User's message

        Returns:
            tuple[ChatMessage, ChatMessage]: Persisted user and bot messages

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionStoreError: If persisting fails
        """
        if not await self._sessions.exists(session_id):
            raise SessionNotFoundError(session_id)

        user_message = new_user_message(message)
        await self._sessions.append_message(session_id, user_message)

        result = await self.respond(message, session_id)
        bot_message = new_bot_message(result)
        await self._sessions.append_message(session_id, bot_message)

        return user_message, bot_message
