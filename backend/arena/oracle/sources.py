"""Move sources: the external capabilities MoveOracle asks for a move."""

import logging
from typing import Protocol

import httpx
from pydantic_ai import Agent

from arena.config import Settings
from arena.game.models import Player
from arena.services.openrouter import OpenRouterClient, OpenRouterConfig

from .agent_factory import AgentFactory, api_key_for_model
from .prompts import MOVE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class MoveSource(Protocol):
    """Anything that can answer a move prompt with free text."""

    name: str

    async def request_move(self, player: Player, prompt: str) -> str: ...


class OpenRouterMoveSource:
    """Asks an OpenRouter chat model for a move."""

    name = "openrouter"

    def __init__(
        self,
        api_key: str,
        config: OpenRouterConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.config = config or OpenRouterConfig()
        self._transport = transport

    async def request_move(self, player: Player, prompt: str) -> str:
        async with OpenRouterClient(
            api_key=self.api_key,
            config=self.config,
            transport=self._transport,
        ) as client:
            return await client.complete(prompt)


class AgentMoveSource:
    """Asks a pydantic-ai agent for a move."""

    name = "agent"

    def __init__(self, factory: AgentFactory[None, str]):
        self._factory = factory

    async def request_move(self, player: Player, prompt: str) -> str:
        agent = self._factory.get_agent()
        result = await agent.run(prompt)
        return result.output


def create_move_agent_factory(settings: Settings) -> AgentFactory[None, str]:
    """Factory for the plain-text move agent (created lazily)."""

    def _create_move_agent() -> Agent[None, str]:
        return Agent(
            model=settings.oracle.agent_model,
            output_type=str,
            system_prompt=MOVE_SYSTEM_PROMPT,
        )

    return AgentFactory(
        _create_move_agent,
        settings=settings,
        model_name=settings.oracle.agent_model,
    )


def create_move_source(settings: Settings) -> MoveSource | None:
    """Build the configured move source, or None for random-only play."""
    provider = settings.oracle.provider

    if provider == "random":
        logger.info("Move oracle running in random mode")
        return None

    if provider == "openrouter":
        if not settings.openrouter_api_key:
            logger.warning("OPENROUTER_API_KEY not set - falling back to random moves")
            return None
        config = OpenRouterConfig(
            model=settings.oracle.model,
            timeout_seconds=settings.oracle.timeout_seconds,
        )
        return OpenRouterMoveSource(api_key=settings.openrouter_api_key, config=config)

    if provider == "agent":
        if api_key_for_model(settings, settings.oracle.agent_model) == "":
            logger.warning(
                f"No API key for {settings.oracle.agent_model} - falling back to random moves"
            )
            return None
        return AgentMoveSource(create_move_agent_factory(settings))

    raise ValueError(f"Unknown oracle provider: {provider}")
