"""Tests for scheduled match play."""

import asyncio
from decimal import Decimal

from conftest import ScriptedSource

from arena.game import MatchState, Move, Player
from arena.oracle import MoveOracle
from arena.runtime import create_arena
from arena.scheduler import create_scheduler, match_job


class BrokenOracle:
    source = None

    async def get_move(self, player: Player) -> Move:
        raise RuntimeError("oracle exploded")


class FlakyOracle:
    source = None

    def __init__(self) -> None:
        self.failing = True

    async def get_move(self, player: Player) -> Move:
        if self.failing:
            raise RuntimeError("oracle exploded")
        return Move.ROCK if player is Player.AI_1 else Move.SCISSORS


def test_match_job_plays_and_records(settings, ai1_wins: ScriptedSource) -> None:
    arena = create_arena(settings, oracle=MoveOracle(source=ai1_wins))

    asyncio.run(match_job(arena))
    asyncio.run(match_job(arena))

    assert len(arena.store.history) == 2
    assert arena.store.history.latest.round_number == 2


def test_match_job_survives_aborted_round(settings) -> None:
    arena = create_arena(settings, oracle=BrokenOracle())

    asyncio.run(match_job(arena))

    assert len(arena.store.history) == 0
    assert arena.engine.state is MatchState.IDLE


def test_scheduler_registers_match_job(settings) -> None:
    arena = create_arena(settings)
    scheduler = create_scheduler(arena)

    job = scheduler.get_job("arena-match")
    assert job is not None
    assert job.max_instances == 1


def test_pending_bet_rolls_over_an_aborted_round(settings) -> None:
    oracle = FlakyOracle()
    arena = create_arena(settings, oracle=oracle)
    account = arena.store.open_account("alice")
    arena.pool.place_wager("alice", Player.AI_1, "100")

    asyncio.run(match_job(arena))
    assert account.has_pending_bet
    assert arena.engine.round_number == 1

    oracle.failing = False
    asyncio.run(match_job(arena))

    assert not account.has_pending_bet
    assert account.balance == Decimal("1100")
    assert account.bet_history[0].match_id == arena.store.history.latest.id
