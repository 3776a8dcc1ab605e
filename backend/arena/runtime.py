"""Arena wiring: one store, one pool, one engine, with settlement subscribed to the engine."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from arena.betting.pool import BettingPool
from arena.betting.settlement import SettlementEngine
from arena.config import Settings
from arena.game.engine import MatchEngine
from arena.game.models import MatchRecord
from arena.oracle import MoveOracle, create_move_source
from arena.services.wallet import WalletClient
from arena.services.wallet import WalletConfig as WalletServiceConfig
from arena.store import ArenaStore, SpectatorAccount, open_account_from_wallet

logger = logging.getLogger(__name__)


@dataclass
class Arena:
    """Everything needed to run matches and take wagers."""

    settings: Settings
    store: ArenaStore
    pool: BettingPool
    settlement: SettlementEngine
    oracle: MoveOracle
    engine: MatchEngine
    wallet: WalletClient

    async def play_round(self) -> MatchRecord | None:
        return await self.engine.run_round()

    async def connect_wallet(self, address: str | None) -> SpectatorAccount:
        """Open an account for `address` seeded from the wallet provider."""
        async with self.wallet:
            return await open_account_from_wallet(self.store, self.wallet, address)


def create_arena(
    settings: Settings,
    oracle: MoveOracle | None = None,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Arena:
    """Build an Arena from settings.

    Match records go to the history sink first, then to settlement.
    """
    store = ArenaStore(config=settings.betting, clock=clock)
    pool = BettingPool(store)
    settlement = SettlementEngine(store, pool)

    if oracle is None:
        oracle = MoveOracle(
            source=create_move_source(settings),
            rng=rng,
            timeout_seconds=settings.oracle.timeout_seconds,
        )

    engine = MatchEngine(
        oracle,
        countdown_start=settings.match.countdown_start,
        tick_seconds=settings.match.tick_seconds,
        clock=clock,
    )
    engine.subscribe(store.history.append)
    engine.subscribe(settlement.settle)

    wallet = WalletClient(
        WalletServiceConfig(
            rpc_url=settings.wallet.rpc_url,
            paper_mode=settings.wallet.paper_mode,
            paper_balance=settings.wallet.paper_balance,
        )
    )

    logger.info(
        f"Arena ready (oracle={oracle.source.name if oracle.source else 'random'}, "
        f"countdown={settings.match.countdown_start}, tick={settings.match.tick_seconds}s)"
    )
    return Arena(
        settings=settings,
        store=store,
        pool=pool,
        settlement=settlement,
        oracle=oracle,
        engine=engine,
        wallet=wallet,
    )
