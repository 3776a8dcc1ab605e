"""OpenRouter service integration."""

from .client import OpenRouterClient
from .config import OpenRouterConfig
from .exceptions import (
    OpenRouterAPIError,
    OpenRouterAuthError,
    OpenRouterRateLimitError,
    OpenRouterResponseError,
)
from .models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

__all__ = [
    "OpenRouterClient",
    "OpenRouterConfig",
    "OpenRouterAPIError",
    "OpenRouterAuthError",
    "OpenRouterRateLimitError",
    "OpenRouterResponseError",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
]
