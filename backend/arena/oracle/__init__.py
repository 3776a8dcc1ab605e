"""Move oracle and its move sources."""

from .exceptions import OracleError, OracleMalformedResponse, OracleUnavailable
from .main import MoveOracle, extract_move
from .sources import (
    AgentMoveSource,
    MoveSource,
    OpenRouterMoveSource,
    create_move_agent_factory,
    create_move_source,
)

__all__ = [
    "OracleError",
    "OracleMalformedResponse",
    "OracleUnavailable",
    "MoveOracle",
    "extract_move",
    "AgentMoveSource",
    "MoveSource",
    "OpenRouterMoveSource",
    "create_move_agent_factory",
    "create_move_source",
]
