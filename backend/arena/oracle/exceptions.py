"""Move oracle failure types. Recovered inside MoveOracle, never raised past it."""


class OracleError(Exception):
    """Base exception for move oracle failures."""

    pass


class OracleUnavailable(OracleError):
    """Move source call failed (transport, status, timeout)."""

    pass


class OracleMalformedResponse(OracleError):
    """Move source replied without a recognizable move."""

    def __init__(self, message: str, content: str | None = None):
        super().__init__(message)
        self.content = content
