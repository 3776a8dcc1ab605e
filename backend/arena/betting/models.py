"""Betting domain models."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from arena.game.models import MatchOutcome, Player

from .calculations import DEFAULT_ODDS, calculate_odds


def short_address(address: str) -> str:
    """Shorten a long address to 'abcd...wxyz' for display."""
    if len(address) <= 10:
        return address
    return f"{address[:4]}...{address[-4:]}"


class Bettor(BaseModel):
    """One wager as it sits in a pool side."""

    model_config = ConfigDict(frozen=True)

    id: int
    address: str
    amount: Decimal = Field(gt=0)
    player: Player
    timestamp: datetime


class Bet(BaseModel):
    """A spectator's own wager and its settlement state."""

    id: int
    address: str
    amount: Decimal = Field(gt=0)
    player: Player
    placed_at: datetime
    match_id: int | None = None
    settled: bool = False
    won: bool | None = None
    odds: Decimal | None = None
    payout: Decimal = Decimal("0")


class LedgerEntry(BaseModel):
    """Balance change recorded by a UserLedger."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["debit", "credit"]
    amount: Decimal
    balance_after: Decimal
    reference: str | None = None


class PoolSnapshot(BaseModel):
    """Side totals captured at one instant; used for settlement payouts."""

    model_config = ConfigDict(frozen=True)

    ai1_total: Decimal = Decimal("0")
    ai2_total: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.ai1_total + self.ai2_total

    def side_total(self, player: Player) -> Decimal:
        return self.ai1_total if player is Player.AI_1 else self.ai2_total

    def odds_for(
        self,
        player: Player,
        places: int = 2,
        default: Decimal = DEFAULT_ODDS,
    ) -> Decimal:
        other = Player.AI_2 if player is Player.AI_1 else Player.AI_1
        return calculate_odds(
            self.side_total(player),
            self.side_total(other),
            places=places,
            default=default,
        )


class PoolSideView(BaseModel):
    """Display summary of one pool side."""

    player: Player
    total: Decimal
    bettor_count: int
    share_pct: float
    odds: Decimal


class PoolView(BaseModel):
    """Live pool summary: both sides plus the latest bettors."""

    ai1: PoolSideView
    ai2: PoolSideView
    total: Decimal
    recent_bettors: list[Bettor] = Field(default_factory=list)


class BetSettlement(BaseModel):
    """Outcome of settling one bet."""

    bet_id: int
    address: str
    player: Player
    amount: Decimal
    won: bool
    odds: Decimal
    payout: Decimal


class SettlementResult(BaseModel):
    """Everything a settlement pass did for one match."""

    match_id: int
    outcome: MatchOutcome
    snapshot: PoolSnapshot
    settlements: list[BetSettlement] = Field(default_factory=list)
    skipped: bool = False

    @property
    def total_paid(self) -> Decimal:
        return sum((s.payout for s in self.settlements), Decimal("0"))
