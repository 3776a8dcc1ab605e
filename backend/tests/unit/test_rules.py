"""Tests for move rules and match records."""

from datetime import datetime, timezone

import pytest

from arena.game import BEATS, MatchHistory, MatchOutcome, MatchRecord, Move, Player
from arena.game.rules import beats, determine_outcome


@pytest.mark.parametrize(
    "ai1, ai2, expected",
    [
        (Move.ROCK, Move.ROCK, MatchOutcome.DRAW),
        (Move.ROCK, Move.PAPER, MatchOutcome.AI_2),
        (Move.ROCK, Move.SCISSORS, MatchOutcome.AI_1),
        (Move.PAPER, Move.ROCK, MatchOutcome.AI_1),
        (Move.PAPER, Move.PAPER, MatchOutcome.DRAW),
        (Move.PAPER, Move.SCISSORS, MatchOutcome.AI_2),
        (Move.SCISSORS, Move.ROCK, MatchOutcome.AI_2),
        (Move.SCISSORS, Move.PAPER, MatchOutcome.AI_1),
        (Move.SCISSORS, Move.SCISSORS, MatchOutcome.DRAW),
    ],
)
def test_determine_outcome(ai1: Move, ai2: Move, expected: MatchOutcome) -> None:
    assert determine_outcome(ai1, ai2) is expected


def test_beats_relation_is_a_cycle() -> None:
    assert set(BEATS) == set(Move)
    assert set(BEATS.values()) == set(Move)
    for move in Move:
        assert beats(move, BEATS[move])
        assert not beats(BEATS[move], move)
        assert not beats(move, move)


def test_outcome_for_player() -> None:
    assert MatchOutcome.for_player(Player.AI_1) is MatchOutcome.AI_1
    assert MatchOutcome.for_player(Player.AI_2) is MatchOutcome.AI_2


def _record(match_id: int, ai1: Move, ai2: Move) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        round_number=match_id,
        ai1_move=ai1,
        ai2_move=ai2,
        outcome=determine_outcome(ai1, ai2),
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_record_describe() -> None:
    assert _record(1, Move.ROCK, Move.SCISSORS).describe() == "rock beats scissors"
    assert _record(2, Move.ROCK, Move.PAPER).describe() == "rock loses to paper"
    assert _record(3, Move.PAPER, Move.PAPER).describe() == "paper ties paper"


def test_record_is_immutable() -> None:
    record = _record(1, Move.ROCK, Move.SCISSORS)
    with pytest.raises(Exception):
        record.outcome = MatchOutcome.AI_2
    assert record.move_for(Player.AI_2) is Move.SCISSORS


def test_history_is_newest_first_and_ignores_duplicates() -> None:
    history = MatchHistory()
    first = _record(1, Move.ROCK, Move.SCISSORS)
    second = _record(2, Move.PAPER, Move.PAPER)

    assert history.append(first)
    assert history.append(second)
    assert not history.append(first)

    assert [r.id for r in history.records] == [2, 1]
    assert history.latest == second
    assert history.get(1) == first
    assert 2 in history
    assert len(history) == 2
