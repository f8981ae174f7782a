"""
Result and error types for the text generation layer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LLMError(Exception):
    """
    The generation service could not produce a response.

    Wraps whatever LiteLLM (or the provider behind it) raised, so callers only
    need to handle one exception type for upstream failures.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class TokenUsage(BaseModel):
    """Token accounting reported by the provider for one completion."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class LLMResponse(BaseModel):
    """Text of one completion plus the model that produced it."""

    text: str
    model: str = ""
    usage: TokenUsage = Field(default_factory=TokenUsage)
