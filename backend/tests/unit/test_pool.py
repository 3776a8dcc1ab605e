"""Tests for the pari-mutuel betting pool."""

from decimal import Decimal

import pytest

from arena.betting import BettingPool, calculate_odds, calculate_winnings
from arena.exceptions import (
    ActiveBetExists,
    InsufficientFunds,
    InvalidAccount,
    InvalidWager,
    UnknownAccount,
)
from arena.game import Player
from arena.store import ArenaStore


def _pool(clock=None) -> tuple[ArenaStore, BettingPool]:
    store = ArenaStore(clock=clock)
    return store, BettingPool(store)


def test_calculate_odds_default_when_a_side_is_empty() -> None:
    assert calculate_odds(Decimal("0"), Decimal("0")) == Decimal("2.0")
    assert calculate_odds(Decimal("100"), Decimal("0")) == Decimal("2.0")
    assert calculate_odds(Decimal("0"), Decimal("100")) == Decimal("2.0")


def test_calculate_odds_rounds_half_up() -> None:
    assert calculate_odds(Decimal("100"), Decimal("300")) == Decimal("4.00")
    assert calculate_odds(Decimal("300"), Decimal("100")) == Decimal("1.33")
    assert calculate_odds(Decimal("200"), Decimal("1")) == Decimal("1.01")
    assert calculate_odds(Decimal("8"), Decimal("1")) == Decimal("1.13")


def test_calculate_winnings_rounds_to_four_places() -> None:
    assert calculate_winnings(Decimal("100"), Decimal("4.00")) == Decimal("400.0000")
    assert calculate_winnings(Decimal("0.33333"), Decimal("1.5")) == Decimal("0.5000")


def test_place_wager_debits_and_adds_to_side(clock) -> None:
    store, pool = _pool(clock)
    account = store.open_account("alice")

    bet = pool.place_wager("alice", "AI-1", "100")

    assert bet.player is Player.AI_1
    assert bet.amount == Decimal("100")
    assert not bet.settled
    assert account.balance == Decimal("900")
    assert account.active_bet is bet
    assert pool.side(Player.AI_1).total == Decimal("100")
    assert pool.side(Player.AI_2).total == Decimal("0")
    assert pool.total == Decimal("100")


def test_side_total_is_exact_sum_of_stakes(clock) -> None:
    store, pool = _pool(clock)
    for i, amount in enumerate(["0.1", "0.2", "0.7"]):
        store.open_account(f"spectator-{i}")
        pool.place_wager(f"spectator-{i}", Player.AI_2, amount)

    side = pool.side(Player.AI_2)
    assert side.total == Decimal("1.0")
    assert side.total == sum((b.amount for b in side.bettors), Decimal("0"))
    assert len(side) == 3


@pytest.mark.parametrize(
    "player, amount",
    [
        (None, "10"),
        ("AI-3", "10"),
        ("AI-1", "0"),
        ("AI-1", "-5"),
        ("AI-1", None),
        ("AI-1", "abc"),
        ("AI-1", "nan"),
        ("AI-1", "Infinity"),
    ],
)
def test_invalid_wager_changes_nothing(player, amount) -> None:
    store, pool = _pool()
    account = store.open_account("alice")

    with pytest.raises(InvalidWager):
        pool.place_wager("alice", player, amount)

    assert account.balance == Decimal("1000")
    assert account.active_bet is None
    assert pool.total == Decimal("0")


def test_insufficient_funds_changes_nothing() -> None:
    store, pool = _pool()
    account = store.open_account("alice", initial_balance=50)

    with pytest.raises(InsufficientFunds):
        pool.place_wager("alice", Player.AI_1, "50.01")

    assert account.balance == Decimal("50")
    assert pool.total == Decimal("0")


def test_second_unsettled_bet_is_rejected() -> None:
    store, pool = _pool()
    account = store.open_account("alice")
    pool.place_wager("alice", Player.AI_1, "100")

    with pytest.raises(ActiveBetExists):
        pool.place_wager("alice", Player.AI_2, "100")

    assert account.balance == Decimal("900")
    assert pool.side(Player.AI_2).total == Decimal("0")


def test_unknown_account_is_rejected() -> None:
    _, pool = _pool()
    with pytest.raises(UnknownAccount):
        pool.place_wager("nobody", Player.AI_1, "10")


def test_current_odds_follow_side_totals() -> None:
    store, pool = _pool()
    for address in ("a", "b", "c", "d"):
        store.open_account(address)

    pool.place_wager("a", Player.AI_1, "100")
    assert pool.current_odds(Player.AI_1) == Decimal("2.0")
    assert pool.current_odds(Player.AI_2) == Decimal("2.0")

    for address in ("b", "c", "d"):
        pool.place_wager(address, Player.AI_2, "100")

    assert pool.current_odds(Player.AI_1) == Decimal("4.00")
    assert pool.current_odds(Player.AI_2) == Decimal("1.33")
    assert pool.potential_winnings("AI-1", "10") == Decimal("40.0000")


def test_view_summarizes_sides_and_recent_bettors(clock) -> None:
    store, pool = _pool(clock)
    for address in ("a", "b", "c"):
        store.open_account(address)
    pool.place_wager("a", Player.AI_1, "100")
    pool.place_wager("b", Player.AI_2, "300")
    pool.place_wager("c", Player.AI_2, "100")

    view = pool.view(recent_limit=2)

    assert view.total == Decimal("500")
    assert view.ai1.bettor_count == 1
    assert view.ai2.bettor_count == 2
    assert view.ai1.share_pct == pytest.approx(20.0)
    assert view.ai2.share_pct == pytest.approx(80.0)
    assert view.ai1.odds == Decimal("5.00")
    assert [b.address for b in view.recent_bettors] == ["c", "b"]


def test_empty_pool_view_splits_evenly() -> None:
    _, pool = _pool()
    view = pool.view()

    assert view.total == Decimal("0")
    assert view.ai1.share_pct == 50.0
    assert view.ai2.share_pct == 50.0
    assert view.recent_bettors == []


@pytest.mark.parametrize("amount", ["10.00001", "1000000000.01", "1e25"])
def test_wager_outside_precision_or_ceiling_is_rejected(amount) -> None:
    store, pool = _pool()
    account = store.open_account("whale", initial_balance="1000000000")

    with pytest.raises(InvalidWager):
        pool.place_wager("whale", Player.AI_1, amount)

    assert account.balance == Decimal("1000000000")
    assert pool.total == Decimal("0")


@pytest.mark.parametrize("balance", ["1e25", "10.00001"])
def test_opening_balance_outside_precision_or_ceiling_is_rejected(balance) -> None:
    store = ArenaStore()

    with pytest.raises(InvalidAccount):
        store.open_account("whale", initial_balance=balance)

    assert "whale" not in store.accounts


def test_negative_view_limit_is_rejected() -> None:
    _, pool = _pool()
    with pytest.raises(ValueError):
        pool.view(recent_limit=-1)
