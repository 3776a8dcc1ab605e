"""Single owned store for spectator accounts, the live pool and match history.

Components receive the store in their constructor and mutate it only through
their own methods. Every wager and every settlement pass holds `store.lock`,
so a settlement sequence (snapshot, credit, mark settled, reset) never
interleaves with a wager.
"""

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from arena.betting.calculations import check_amount, quantum, to_amount
from arena.betting.ledger import UserLedger
from arena.betting.models import Bet
from arena.betting.pool import BettingPoolSide
from arena.config import BettingConfig
from arena.exceptions import InvalidAccount, UnknownAccount
from arena.game.history import MatchHistory
from arena.game.models import Player
from arena.services.wallet import WalletClient

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SpectatorAccount:
    """Balance plus bet state for one spectator address."""

    address: str
    ledger: UserLedger
    active_bet: Bet | None = None
    bet_history: list[Bet] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        return self.ledger.balance

    @property
    def has_pending_bet(self) -> bool:
        return self.active_bet is not None and not self.active_bet.settled

    def archive_active_bet(self) -> None:
        """Move a settled active bet to the front of the history."""
        if self.active_bet is None or not self.active_bet.settled:
            return
        self.bet_history.insert(0, self.active_bet)
        self.active_bet = None


class ArenaStore:
    """Shared state handle passed to the pool, settlement engine and API."""

    def __init__(
        self,
        config: BettingConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        id_start: int = 1,
    ):
        self.config = config or BettingConfig()
        self.clock = clock or utc_now
        self.lock = threading.RLock()
        self.accounts: dict[str, SpectatorAccount] = {}
        self.sides: dict[Player, BettingPoolSide] = {
            Player.AI_1: BettingPoolSide(Player.AI_1),
            Player.AI_2: BettingPoolSide(Player.AI_2),
        }
        self.history = MatchHistory()
        self.settled_match_ids: set[int] = set()
        self._ids = itertools.count(id_start)

    def next_id(self) -> int:
        """Monotonic id shared by bets and bettor entries."""
        return next(self._ids)

    def open_account(
        self,
        address: str,
        initial_balance: Decimal | int | float | str | None = None,
    ) -> SpectatorAccount:
        """Open an account, or return the existing one for this address."""
        if not address or not address.strip():
            raise InvalidAccount("Address is required")

        with self.lock:
            existing = self.accounts.get(address)
            if existing is not None:
                return existing

            if initial_balance is None:
                initial_balance = self.config.initial_balance
            try:
                balance = to_amount(initial_balance)
            except (InvalidOperation, ValueError):
                raise InvalidAccount(f"Invalid initial balance: {initial_balance!r}")
            if not balance.is_finite() or balance < 0:
                raise InvalidAccount(f"Initial balance must be non-negative, got {balance}")
            try:
                check_amount(
                    balance,
                    places=self.config.amount_places,
                    maximum=to_amount(self.config.max_amount),
                )
            except ValueError as e:
                raise InvalidAccount(f"Invalid initial balance: {e}")

            account = SpectatorAccount(address=address, ledger=UserLedger(balance))
            self.accounts[address] = account
            logger.info(f"Opened account {address} with balance {balance}")
            return account

    def get_account(self, address: str) -> SpectatorAccount:
        account = self.accounts.get(address)
        if account is None:
            raise UnknownAccount(f"No account for address: {address}")
        return account

    def pending_accounts(self) -> list[SpectatorAccount]:
        """Accounts holding an unsettled bet, in the order they were opened."""
        return [account for account in self.accounts.values() if account.has_pending_bet]


async def open_account_from_wallet(
    store: ArenaStore,
    wallet: WalletClient,
    address: str | None,
) -> SpectatorAccount:
    """Open an account seeded with the wallet provider's balance for `address`."""
    if address and address in store.accounts:
        return store.accounts[address]
    wallet_balance = await wallet.get_balance(address)
    logger.info(
        f"Seeding {wallet_balance.address} from {wallet_balance.source} wallet: "
        f"{wallet_balance.balance}"
    )
    # Lamport precision is finer than the ledger's
    balance = wallet_balance.balance.quantize(
        quantum(store.config.amount_places), rounding=ROUND_DOWN
    )
    return store.open_account(wallet_balance.address, balance)
