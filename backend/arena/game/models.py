"""Match domain types."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Move(StrEnum):
    """Rock-paper-scissors moves."""

    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class Player(StrEnum):
    """The two AI players in every match."""

    AI_1 = "AI-1"
    AI_2 = "AI-2"


class MatchOutcome(StrEnum):
    """Result of a match: a winning player or a draw."""

    AI_1 = "AI-1"
    AI_2 = "AI-2"
    DRAW = "draw"

    @classmethod
    def for_player(cls, player: Player) -> "MatchOutcome":
        return cls(player.value)


class MatchState(StrEnum):
    """Match engine lifecycle states."""

    IDLE = "idle"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    RESULT = "result"


class MatchRecord(BaseModel):
    """Completed match. Immutable once emitted."""

    model_config = ConfigDict(frozen=True)

    id: int
    round_number: int = Field(ge=1)
    ai1_move: Move
    ai2_move: Move
    outcome: MatchOutcome
    timestamp: datetime

    def move_for(self, player: Player) -> Move:
        return self.ai1_move if player is Player.AI_1 else self.ai2_move

    def describe(self) -> str:
        """Human-readable one-liner, e.g. 'rock beats scissors'."""
        if self.outcome is MatchOutcome.DRAW:
            verb = "ties"
        elif self.outcome is MatchOutcome.AI_1:
            verb = "beats"
        else:
            verb = "loses to"
        return f"{self.ai1_move} {verb} {self.ai2_move}"


class EngineStatus(BaseModel):
    """Read-only view of the engine for observers."""

    state: MatchState
    countdown: int
    round_number: int
    last_record: MatchRecord | None = None
