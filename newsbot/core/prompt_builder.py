"""
News prompt assembly.

Renders retrieved documents into labelled context blocks and combines them
with recent conversation history and the user query into the single text
prompt sent to the generation model. No length truncation happens here.

Dependencies: langchain_core.prompts
System role: Context and prompt assembler
"""

from collections.abc import Sequence
from datetime import datetime

from langchain_core.prompts import PromptTemplate

from newsbot.models.chat import ChatMessage
from newsbot.models.document import RetrievedDocument

HISTORY_WINDOW = 10

NEWS_PROMPT = PromptTemplate.from_template(
    """Context: {context}

Conversation History:
{history}

User Query: {query}

Please provide a helpful response based on the context and conversation history."""
)


def format_published_date(value: str | None) -> str:
    """Render an ISO timestamp as ``M/D/YYYY``; unparseable values become ``Unknown date``."""
    if not value:
        return "Unknown date"
    try:
        published = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "Unknown date"
    return f"{published.month}/{published.day}/{published.year}"


def build_context(documents: Sequence[RetrievedDocument]) -> str:
    """
    Render retrieved documents as labelled blocks in rank order.

    Args:
        documents: Retrieval results, best match first

    Returns:
        str: One block per document separated by ``---`` lines
    """
    blocks = [
        f"Document {index}:\n"
        f"Title: {doc.title}\n"
        f"Source: {doc.source}\n"
        f"Published: {format_published_date(doc.published_at)}\n"
        f"Content: {doc.content}\n"
        f"URL: {doc.url}\n"
        f"---"
        for index, doc in enumerate(documents, start=1)
    ]
    return "\n".join(blocks)


def format_history(history: Sequence[ChatMessage], window: int = HISTORY_WINDOW) -> str:
    """Last ``window`` entries with content, oldest first, as ``role: content`` lines."""
    entries = [message for message in history if message.content][-window:]
    return "\n".join(f"{message.type.value}: {message.content}" for message in entries)


def build_prompt(query: str, context: str, history: Sequence[ChatMessage]) -> str:
    """
    Assemble the generation prompt.

    Args:
        query: Current user query
        context: Output of ``build_context``
        history: Session history, oldest first

    Returns:
        str: Prompt text for the generation model
    """
    return NEWS_PROMPT.format(
        context=context,
        history=format_history(history),
        query=query,
    )
