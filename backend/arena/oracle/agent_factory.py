"""Lazy construction of pydantic-ai agents for the move oracle."""

import logging
import os
from typing import Callable, Generic, TypeVar

from pydantic_ai import Agent

from arena.config import Settings, get_settings

logger = logging.getLogger(__name__)

DepsT = TypeVar("DepsT")
OutputT = TypeVar("OutputT")

# Model prefix -> (environment variable pydantic-ai reads, Settings field)
PROVIDER_KEYS: dict[str, tuple[str, str]] = {
    "openai": ("OPENAI_API_KEY", "openai_api_key"),
    "anthropic": ("ANTHROPIC_API_KEY", "anthropic_api_key"),
}


def api_key_for_model(settings: Settings, model_name: str) -> str | None:
    """Configured API key for a prefixed model name.

    Returns None when the provider is not one we hold keys for, and an empty
    string when it is but no key is set.
    """
    provider, _, _ = model_name.partition(":")
    if provider not in PROVIDER_KEYS:
        return None
    _, field_name = PROVIDER_KEYS[provider]
    return getattr(settings, field_name)


class AgentFactory(Generic[DepsT, OutputT]):
    """Creates one agent on first use, after exporting its provider's API key."""

    def __init__(
        self,
        create_fn: Callable[[], Agent[DepsT, OutputT]],
        settings: Settings | None = None,
        model_name: str | None = None,
    ):
        self._create_fn = create_fn
        self._settings = settings
        self._model_name = model_name
        self._agent: Agent[DepsT, OutputT] | None = None

    @property
    def created(self) -> bool:
        return self._agent is not None

    def get_agent(self) -> Agent[DepsT, OutputT]:
        if self._agent is None:
            self._export_api_key()
            self._agent = self._create_fn()
            logger.info(f"Created move agent ({self._model_name or 'custom model'})")
        return self._agent

    def _export_api_key(self) -> None:
        if not self._model_name:
            return
        settings = self._settings or get_settings()
        key = api_key_for_model(settings, self._model_name)
        if key:
            env_var, _ = PROVIDER_KEYS[self._model_name.partition(":")[0]]
            os.environ.setdefault(env_var, key)
