"""LLM provider and model enums for the move oracle.

OpenRouter models are addressed by slug through the HTTP client; OpenAI and
Anthropic models go through pydantic-ai and need a provider prefix.
"""

from enum import StrEnum


class OpenRouterModel(StrEnum):
    """OpenRouter model slugs."""

    DEEPSEEK_V3_FREE = "deepseek/deepseek-chat-v3-0324:free"
    LLAMA_3_3_70B_FREE = "meta-llama/llama-3.3-70b-instruct:free"
    GEMINI_FLASH = "google/gemini-2.0-flash-001"


class OpenAIModel(StrEnum):
    """OpenAI models available via API."""

    GPT_5 = "gpt-5"
    GPT_5_MINI = "gpt-5-mini"
    GPT_5_NANO = "gpt-5-nano"


class AnthropicModel(StrEnum):
    """Anthropic Claude models available via API."""

    CLAUDE_SONNET_4_5 = "claude-sonnet-4-5"
    CLAUDE_HAIKU_4_5 = "claude-haiku-4-5"


def get_model_string(model: OpenAIModel | AnthropicModel | OpenRouterModel) -> str:
    """Get the model string for any supported model.

    pydantic-ai models get their provider prefix; OpenRouter slugs are
    returned as-is for the HTTP client.
    """
    if isinstance(model, OpenAIModel):
        return f"openai:{model.value}"
    elif isinstance(model, AnthropicModel):
        return f"anthropic:{model.value}"
    return model.value
