"""Wallet service config."""

from pydantic import BaseModel

LAMPORTS_PER_SOL = 1_000_000_000


class WalletConfig(BaseModel):
    """Wallet balance provider config."""

    rpc_url: str = "https://api.devnet.solana.com"
    paper_mode: bool = True
    paper_balance: float = 10.0
    commitment: str = "confirmed"
    timeout_seconds: float = 10.0
