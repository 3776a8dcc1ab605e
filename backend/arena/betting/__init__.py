"""Spectator betting: ledger, pari-mutuel pool and settlement."""

from .calculations import calculate_odds, calculate_winnings
from .ledger import UserLedger
from .models import (
    Bet,
    BetSettlement,
    Bettor,
    LedgerEntry,
    PoolSnapshot,
    PoolView,
    SettlementResult,
    short_address,
)
from .pool import BettingPool, BettingPoolSide
from .settlement import SettlementEngine

__all__ = [
    "calculate_odds",
    "calculate_winnings",
    "UserLedger",
    "Bet",
    "BetSettlement",
    "Bettor",
    "LedgerEntry",
    "PoolSnapshot",
    "PoolView",
    "SettlementResult",
    "short_address",
    "BettingPool",
    "BettingPoolSide",
    "SettlementEngine",
]
