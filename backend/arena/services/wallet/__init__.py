"""Wallet balance provider."""

from .client import WalletClient
from .config import LAMPORTS_PER_SOL, WalletConfig
from .exceptions import WalletAPIError, WalletDisconnectedError, WalletRPCError
from .models import WalletBalance

__all__ = [
    "WalletClient",
    "WalletConfig",
    "LAMPORTS_PER_SOL",
    "WalletAPIError",
    "WalletDisconnectedError",
    "WalletRPCError",
    "WalletBalance",
]
