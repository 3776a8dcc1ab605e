"""Bet settlement against completed matches."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from arena.game.models import MatchOutcome, MatchRecord

from .calculations import calculate_winnings
from .models import BetSettlement, PoolSnapshot, SettlementResult, short_address
from .pool import BettingPool

if TYPE_CHECKING:
    from arena.store import ArenaStore, SpectatorAccount

logger = logging.getLogger(__name__)


class SettlementEngine:
    """Pays out pending bets once per MatchRecord and clears the pool.

    Sequence for a new record, all under the store lock:
    1. snapshot the pool side totals
    2. for each unsettled bet: compare the outcome, credit stake x odds on a win
    3. mark the bet settled (won, odds, match id) and archive it
    4. reset the pool

    Every payout is computed before any balance or bet is changed, so a
    pricing failure leaves the pool, balances and bets untouched.

    A draw pays nothing. A record id that was already settled is a no-op, and
    a bet already marked settled is never paid twice.
    """

    def __init__(self, store: ArenaStore, pool: BettingPool):
        self._store = store
        self._pool = pool

    def settle(self, record: MatchRecord) -> SettlementResult:
        config = self._store.config
        default_odds = Decimal(str(config.default_odds))

        with self._store.lock:
            if record.id in self._store.settled_match_ids:
                logger.info(f"Match {record.id} already settled, ignoring re-delivery")
                return SettlementResult(
                    match_id=record.id,
                    outcome=record.outcome,
                    snapshot=PoolSnapshot(),
                    skipped=True,
                )

            snapshot = self._pool.snapshot()
            result = SettlementResult(
                match_id=record.id,
                outcome=record.outcome,
                snapshot=snapshot,
            )

            # Price every bet before touching any of them
            planned: list[tuple[SpectatorAccount, BetSettlement]] = []
            for account in self._store.pending_accounts():
                bet = account.active_bet
                if bet is None or bet.settled:
                    continue

                won = record.outcome == MatchOutcome.for_player(bet.player)
                odds = snapshot.odds_for(
                    bet.player,
                    places=config.odds_places,
                    default=default_odds,
                )
                payout = Decimal("0")
                if won:
                    payout = calculate_winnings(bet.amount, odds, places=config.amount_places)

                planned.append(
                    (
                        account,
                        BetSettlement(
                            bet_id=bet.id,
                            address=account.address,
                            player=bet.player,
                            amount=bet.amount,
                            won=won,
                            odds=odds,
                            payout=payout,
                        ),
                    )
                )

            for account, settlement in planned:
                bet = account.active_bet
                if settlement.won:
                    account.ledger.credit(settlement.payout, reference=f"match:{record.id}")

                bet.settled = True
                bet.won = settlement.won
                bet.match_id = record.id
                bet.odds = settlement.odds
                bet.payout = settlement.payout
                account.archive_active_bet()

                result.settlements.append(settlement)
                logger.info(
                    f"Settled bet #{bet.id} for {short_address(account.address)}: "
                    f"{'won ' + str(settlement.payout) if settlement.won else 'lost'} "
                    f"(match {record.id}, {record.outcome}, odds {settlement.odds})"
                )

            self._store.settled_match_ids.add(record.id)
            self._pool.reset()

        logger.info(
            f"Match {record.id} settled: {len(result.settlements)} bets, "
            f"paid {result.total_paid} from pool {snapshot.total}"
        )
        return result

    def __call__(self, record: MatchRecord) -> SettlementResult:
        return self.settle(record)
