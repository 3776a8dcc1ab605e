"""Type-safe Pydantic models for OpenRouter chat-completions payloads."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single chat message."""

    role: Literal["system", "user", "assistant"]
    content: str | None = None


class ChatCompletionRequest(BaseModel):
    """Request body for /chat/completions."""

    model: str
    messages: list[ChatMessage]


class ChatChoice(BaseModel):
    """One completion choice."""

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response body from /chat/completions."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)

    @property
    def content(self) -> str | None:
        """Text of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content
