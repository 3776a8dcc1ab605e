"""Rock-paper-scissors outcome table."""

from .models import MatchOutcome, Move

# Each move beats exactly the move it maps to
BEATS: dict[Move, Move] = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


def beats(move: Move, other: Move) -> bool:
    """Return True if `move` beats `other`."""
    return BEATS[move] == other


def determine_outcome(ai1_move: Move, ai2_move: Move) -> MatchOutcome:
    """Outcome of AI-1 playing `ai1_move` against AI-2 playing `ai2_move`."""
    if ai1_move == ai2_move:
        return MatchOutcome.DRAW
    if beats(ai1_move, ai2_move):
        return MatchOutcome.AI_1
    return MatchOutcome.AI_2
