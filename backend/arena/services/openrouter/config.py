"""Configuration for OpenRouter client."""

from pydantic import BaseModel

from arena.llm_providers import OpenRouterModel


class OpenRouterConfig(BaseModel):
    """Configuration for OpenRouter chat-completions client."""

    base_url: str = "https://openrouter.ai/api/v1"
    model: str = OpenRouterModel.DEEPSEEK_V3_FREE.value
    referer: str = "http://localhost:5173"
    title: str = "AI Rock Paper Scissors"

    # Retry settings
    timeout_seconds: float = 30.0
    max_retries: int = 3
