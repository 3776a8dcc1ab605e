"""Pari-mutuel betting pool for the current match."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from arena.exceptions import ActiveBetExists, InsufficientFunds, InvalidWager
from arena.game.models import Player

from .calculations import calculate_winnings, check_amount, share_percent, to_amount
from .models import Bet, Bettor, PoolSideView, PoolSnapshot, PoolView, short_address

if TYPE_CHECKING:
    from arena.store import ArenaStore

logger = logging.getLogger(__name__)


class BettingPoolSide:
    """Stake on one player. `total` always equals the sum of bettor amounts."""

    def __init__(self, player: Player):
        self.player = player
        self._bettors: list[Bettor] = []
        self._total = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def bettors(self) -> tuple[Bettor, ...]:
        return tuple(self._bettors)

    def add(self, bettor: Bettor) -> None:
        if bettor.player is not self.player:
            raise ValueError(f"Bettor on {bettor.player} added to {self.player} side")
        self._bettors.append(bettor)
        self._total += bettor.amount

    def clear(self) -> None:
        self._bettors = []
        self._total = Decimal("0")

    def __len__(self) -> int:
        return len(self._bettors)


def _parse_player(player: Player | str | None) -> Player:
    if player is None:
        raise InvalidWager("No player selected")
    try:
        return Player(player)
    except ValueError:
        raise InvalidWager(f"Unknown player: {player!r}")


def _parse_amount(
    amount: Decimal | int | float | str | None,
    places: int,
    maximum: Decimal,
) -> Decimal:
    if amount is None:
        raise InvalidWager("Bet amount is required")
    try:
        value = to_amount(amount)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidWager(f"Invalid bet amount: {amount!r}")
    if not value.is_finite() or value <= 0:
        raise InvalidWager(f"Bet amount must be greater than 0, got {amount}")
    try:
        check_amount(value, places, maximum)
    except ValueError as e:
        raise InvalidWager(str(e))
    return value


class BettingPool:
    """Accumulates wagers per side and derives live odds from the side totals.

    Wagers are debited from the spectator's ledger at placement time. The pool
    is cleared only by the settlement engine, after it has captured the
    snapshot it pays out from.
    """

    def __init__(self, store: ArenaStore):
        self._store = store

    @property
    def config(self):
        return self._store.config

    def _amount(self, amount: Decimal | int | float | str | None) -> Decimal:
        return _parse_amount(
            amount,
            places=self.config.amount_places,
            maximum=to_amount(self.config.max_amount),
        )

    def side(self, player: Player) -> BettingPoolSide:
        return self._store.sides[player]

    @property
    def total(self) -> Decimal:
        return sum((side.total for side in self._store.sides.values()), Decimal("0"))

    def place_wager(
        self,
        address: str,
        player: Player | str | None,
        amount: Decimal | int | float | str | None,
    ) -> Bet:
        """Debit the spectator and add their stake to the chosen side."""
        player = _parse_player(player)
        amount = self._amount(amount)

        with self._store.lock:
            account = self._store.get_account(address)

            if account.has_pending_bet:
                raise ActiveBetExists(
                    f"{address} already has an unsettled bet "
                    f"(#{account.active_bet.id} on {account.active_bet.player})"
                )
            if not account.ledger.can_afford(amount):
                raise InsufficientFunds(
                    f"Insufficient balance: requested {amount}, available {account.balance}",
                    balance=account.balance,
                    requested=amount,
                )

            bet_id = self._store.next_id()
            placed_at = self._store.clock()
            account.ledger.debit(amount, reference=f"bet:{bet_id}")

            bet = Bet(
                id=bet_id,
                address=address,
                amount=amount,
                player=player,
                placed_at=placed_at,
            )
            self.side(player).add(
                Bettor(
                    id=bet_id,
                    address=address,
                    amount=amount,
                    player=player,
                    timestamp=placed_at,
                )
            )
            account.active_bet = bet

        snapshot = self.snapshot()
        logger.info(
            f"Wager #{bet_id}: {short_address(address)} staked {amount} on {player} "
            f"(pool AI-1={snapshot.ai1_total} AI-2={snapshot.ai2_total})"
        )
        return bet

    def snapshot(self) -> PoolSnapshot:
        with self._store.lock:
            return PoolSnapshot(
                ai1_total=self.side(Player.AI_1).total,
                ai2_total=self.side(Player.AI_2).total,
            )

    def current_odds(self, player: Player | str) -> Decimal:
        """Live pari-mutuel odds for `player`; the default applies while either side is empty."""
        return self.snapshot().odds_for(
            Player(player),
            places=self.config.odds_places,
            default=Decimal(str(self.config.default_odds)),
        )

    def potential_winnings(self, player: Player | str, amount: Decimal | int | float | str) -> Decimal:
        """What `amount` on `player` would pay at the current odds."""
        return calculate_winnings(
            self._amount(amount),
            self.current_odds(player),
            places=self.config.amount_places,
        )

    def reset(self) -> None:
        """Clear both sides. Only the settlement engine calls this."""
        with self._store.lock:
            for side in self._store.sides.values():
                side.clear()
        logger.debug("Betting pool reset")

    def view(self, recent_limit: int | None = None) -> PoolView:
        """Summary of both sides and the most recent bettors, newest first."""
        if recent_limit is None:
            recent_limit = self.config.recent_bets_limit
        if recent_limit < 0:
            raise ValueError(f"recent_limit must be non-negative, got {recent_limit}")

        with self._store.lock:
            snapshot = self.snapshot()
            sides = {}
            for player in Player:
                side = self.side(player)
                sides[player] = PoolSideView(
                    player=player,
                    total=side.total,
                    bettor_count=len(side),
                    share_pct=share_percent(side.total, snapshot.total),
                    odds=self.current_odds(player),
                )
            bettors = [b for player in Player for b in self.side(player).bettors]

        recent = sorted(bettors, key=lambda b: (b.timestamp, b.id), reverse=True)
        return PoolView(
            ai1=sides[Player.AI_1],
            ai2=sides[Player.AI_2],
            total=snapshot.total,
            recent_bettors=recent[:recent_limit],
        )
