"""
Generation result schemas.

Uniform result returned by the chat mediator, with an explicit outcome so
callers never infer failure from the answer text.

Dependencies: pydantic
System role: Mediator response schema
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from newsbot.models.chat import SourceReference


class GenerationOutcome(str, Enum):
    """How a response was produced."""

    OK = "ok"
    NO_RESULTS = "no_results"
    INVALID_QUERY = "invalid_query"
    UPSTREAM_FAILURE = "upstream_failure"


class GenerationResult(BaseModel):
    """Answer text, its sources, and how it was produced."""

    model_config = ConfigDict(frozen=True)

    text: str
    sources: list[SourceReference] = Field(default_factory=list)
    retrieved_docs_count: int = 0
    outcome: GenerationOutcome = GenerationOutcome.OK

    @property
    def is_error(self) -> bool:
        return self.outcome is GenerationOutcome.UPSTREAM_FAILURE
