"""Spectator balance register."""

import logging
from decimal import Decimal

from arena.exceptions import InsufficientFunds, InvalidWager

from .calculations import to_amount
from .models import LedgerEntry

logger = logging.getLogger(__name__)


class UserLedger:
    """In-memory balance with exactly two mutators.

    `debit` rejects anything above the current balance, so the balance never
    goes negative. `credit` has no upper bound.
    """

    def __init__(self, initial_balance: Decimal | int | float | str = 0):
        balance = to_amount(initial_balance)
        if balance < 0:
            raise ValueError(f"Initial balance cannot be negative: {balance}")
        self._balance = balance
        self._entries: list[LedgerEntry] = []

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def can_afford(self, amount: Decimal) -> bool:
        return to_amount(amount) <= self._balance

    def debit(self, amount: Decimal | int | float | str, reference: str | None = None) -> Decimal:
        """Remove `amount` from the balance and return the new balance."""
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidWager(f"Debit amount must be positive, got {amount}")
        if amount > self._balance:
            raise InsufficientFunds(
                f"Insufficient balance: requested {amount}, available {self._balance}",
                balance=self._balance,
                requested=amount,
            )

        self._balance -= amount
        self._entries.append(
            LedgerEntry(kind="debit", amount=amount, balance_after=self._balance, reference=reference)
        )
        return self._balance

    def credit(self, amount: Decimal | int | float | str, reference: str | None = None) -> Decimal:
        """Add `amount` to the balance and return the new balance."""
        amount = to_amount(amount)
        if amount < 0:
            raise ValueError(f"Credit amount cannot be negative: {amount}")

        self._balance += amount
        self._entries.append(
            LedgerEntry(kind="credit", amount=amount, balance_after=self._balance, reference=reference)
        )
        return self._balance
