from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any
from uuid import uuid4

import httpx

from .config import LAMPORTS_PER_SOL, WalletConfig
from .exceptions import WalletAPIError, WalletDisconnectedError, WalletRPCError
from .models import WalletBalance

logger = logging.getLogger(__name__)


class WalletClient:
    """Read-only balance lookup for a wallet address.

    In paper mode no network calls are made and every address reports the
    configured paper balance.
    """

    def __init__(
        self,
        config: WalletConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or WalletConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.info(f"Initialized WalletClient (paper_mode={self.config.paper_mode})")

    async def __aenter__(self) -> WalletClient:
        if not self.config.paper_mode:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed WalletClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("WalletClient must be used as async context manager")
        return self._client

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": uuid4().hex[:8],
            "method": method,
            "params": params,
        }
        try:
            response = await self.client.post(self.config.rpc_url, json=payload)
        except httpx.RequestError as e:
            raise WalletAPIError(f"Network error calling {method}: {e}")

        if response.status_code >= 400:
            raise WalletAPIError(
                f"RPC {method} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        body = response.json()
        if body.get("error"):
            error = body["error"]
            raise WalletRPCError(f"RPC {method} error: {error.get('message', error)}")
        return body.get("result")

    async def get_balance(self, address: str | None) -> WalletBalance:
        """Get the current balance for an address, in SOL."""
        if not address:
            raise WalletDisconnectedError("No wallet connected")

        if self.config.paper_mode:
            return WalletBalance(
                address=address,
                balance=Decimal(str(self.config.paper_balance)),
                source="paper",
            )

        result = await self._rpc(
            "getBalance", [address, {"commitment": self.config.commitment}]
        )
        try:
            lamports = int(result["value"])
        except (TypeError, KeyError, ValueError):
            raise WalletRPCError(f"Unexpected getBalance result: {result!r}")

        balance = Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)
        logger.debug(f"Wallet {address} balance: {balance} SOL")
        return WalletBalance(address=address, balance=balance, source="rpc")
