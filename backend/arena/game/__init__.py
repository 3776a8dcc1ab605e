"""Match domain: moves, outcome rules, engine and history."""

from .engine import MatchEngine
from .history import MatchHistory
from .models import EngineStatus, MatchOutcome, MatchRecord, MatchState, Move, Player
from .rules import BEATS, beats, determine_outcome

__all__ = [
    "MatchEngine",
    "MatchHistory",
    "EngineStatus",
    "MatchOutcome",
    "MatchRecord",
    "MatchState",
    "Move",
    "Player",
    "BEATS",
    "beats",
    "determine_outcome",
]
