"""Wallet service exceptions."""


class WalletAPIError(Exception):
    """Base wallet exception."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class WalletDisconnectedError(WalletAPIError):
    """No wallet address connected."""

    pass


class WalletRPCError(WalletAPIError):
    """RPC node returned an error object."""

    pass
