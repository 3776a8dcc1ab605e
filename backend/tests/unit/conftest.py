"""Shared fixtures for arena tests."""

from datetime import datetime, timedelta, timezone

import pytest

from arena.config import BettingConfig, MatchConfig, OracleConfig, Settings
from arena.game.models import Player


class ScriptedSource:
    """Move source that answers with fixed text per player."""

    name = "scripted"

    def __init__(self, replies: dict[Player, str]):
        self.replies = replies
        self.prompts: list[str] = []

    async def request_move(self, player: Player, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.replies[player]


class SteppingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        openrouter_api_key="",
        openai_api_key="",
        anthropic_api_key="",
        logfire_token="",
        match=MatchConfig(tick_seconds=0.0),
        betting=BettingConfig(),
        oracle=OracleConfig(provider="random"),
    )


@pytest.fixture
def ai1_wins() -> ScriptedSource:
    return ScriptedSource({Player.AI_1: "rock", Player.AI_2: "scissors"})


@pytest.fixture
def draw() -> ScriptedSource:
    return ScriptedSource({Player.AI_1: "paper", Player.AI_2: "Paper."})
