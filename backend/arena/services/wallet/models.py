"""Wallet models."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel


class WalletBalance(BaseModel):
    """Balance for one wallet address, in SOL."""

    address: str
    balance: Decimal
    source: Literal["paper", "rpc"]
