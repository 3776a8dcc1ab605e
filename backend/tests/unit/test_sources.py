"""Tests for building move sources from settings."""

import asyncio

from pydantic_ai import Agent
from pydantic_ai.models.test import TestModel

from arena.config import OracleConfig
from arena.game import Move, Player
from arena.oracle import (
    AgentMoveSource,
    MoveOracle,
    OpenRouterMoveSource,
    create_move_source,
)
from arena.oracle.agent_factory import AgentFactory, api_key_for_model


def test_random_provider_has_no_source(settings) -> None:
    assert create_move_source(settings) is None


def test_openrouter_without_key_has_no_source(settings) -> None:
    settings.oracle = OracleConfig(provider="openrouter")
    assert create_move_source(settings) is None


def test_openrouter_source_uses_configured_model(settings) -> None:
    settings.oracle = OracleConfig(provider="openrouter", model="meta-llama/test:free")
    settings.openrouter_api_key = "sk-test"

    source = create_move_source(settings)

    assert isinstance(source, OpenRouterMoveSource)
    assert source.config.model == "meta-llama/test:free"


def test_agent_source_reads_agent_output(settings) -> None:
    agent = Agent(TestModel(custom_output_text="Scissors!"), output_type=str)
    factory = AgentFactory(lambda: agent, settings=settings)
    oracle = MoveOracle(source=AgentMoveSource(factory))

    move = asyncio.run(oracle.get_move(Player.AI_1))

    assert move is Move.SCISSORS
    assert oracle.fallback_count == 0
    assert factory.get_agent() is agent


def test_agent_provider_without_key_has_no_source(settings) -> None:
    settings.oracle = OracleConfig(provider="agent", agent_model="anthropic:claude-haiku-4-5")
    assert create_move_source(settings) is None


def test_agent_source_is_built_lazily(settings) -> None:
    settings.oracle = OracleConfig(provider="agent", agent_model="openai:gpt-5-nano")
    settings.openai_api_key = "sk-test"

    source = create_move_source(settings)

    assert isinstance(source, AgentMoveSource)
    assert not source._factory.created


def test_api_key_lookup_by_model_prefix(settings) -> None:
    settings.openai_api_key = "sk-test"

    assert api_key_for_model(settings, "openai:gpt-5") == "sk-test"
    assert api_key_for_model(settings, "anthropic:claude-sonnet-4-5") == ""
    assert api_key_for_model(settings, "test") is None
