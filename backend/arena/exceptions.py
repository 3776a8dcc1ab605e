"""Arena exception hierarchy.

Financial errors (InvalidWager, InsufficientFunds, ActiveBetExists) are raised
before any state mutation. RoundAborted is raised after the engine is back in
idle. Oracle failures never appear here: MoveOracle recovers them locally.
"""


class ArenaError(Exception):
    """Base exception for arena errors."""

    pass


class InvalidWager(ArenaError):
    """Non-positive amount or no player selected."""

    pass


class InvalidAccount(InvalidWager):
    """Account cannot be opened with the given parameters."""

    pass


class InsufficientFunds(ArenaError):
    """Debit larger than the current balance."""

    def __init__(self, message: str, balance=None, requested=None):
        super().__init__(message)
        self.balance = balance
        self.requested = requested


class ActiveBetExists(ArenaError):
    """Spectator already has an unsettled bet."""

    pass


class UnknownAccount(ArenaError):
    """No account is open for the address."""

    pass


class InvalidTransition(ArenaError):
    """Match engine asked to move along an edge its state machine lacks."""

    pass


class RoundAborted(ArenaError):
    """Round could not reach a result; no record was produced."""

    pass


class ListenerFailed(ArenaError):
    """A match record was emitted but at least one subscriber raised on it."""

    def __init__(self, message: str, record=None, errors=None):
        super().__init__(message)
        self.record = record
        self.errors = errors or []
