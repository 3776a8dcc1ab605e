"""MoveOracle: a total move interface over an unreliable move source."""

import asyncio
import logging
import random
import re

from arena.game.models import Move, Player

from .exceptions import OracleError, OracleMalformedResponse, OracleUnavailable
from .prompts import build_move_prompt
from .sources import MoveSource

logger = logging.getLogger(__name__)

_MOVE_PATTERN = re.compile(r"\b(rock|paper|scissors)\b", re.IGNORECASE)
_TRAILING = " \t\r\n.!?\"'`*"


def extract_move(content: str | None) -> Move | None:
    """Find the move named in a free-text reply.

    An exact reply ("Rock.", "scissors") wins; otherwise the first whole-word
    mention of a move is used.
    """
    if not content:
        return None

    normalized = content.strip(_TRAILING).lower()
    try:
        return Move(normalized)
    except ValueError:
        pass

    match = _MOVE_PATTERN.search(content)
    if match:
        return Move(match.group(1).lower())
    return None


class MoveOracle:
    """Gets one move per player slot and never raises.

    Any failure of the source (transport, timeout, unparseable reply) falls
    back to a uniformly random move, so a round is never blocked by the
    source being unavailable.
    """

    def __init__(
        self,
        source: MoveSource | None = None,
        rng: random.Random | None = None,
        timeout_seconds: float | None = 15.0,
    ):
        self.source = source
        self.rng = rng or random.Random()
        self.timeout_seconds = timeout_seconds
        self.fallback_count = 0

    def random_move(self) -> Move:
        return self.rng.choice(list(Move))

    async def _ask(self, player: Player) -> Move:
        prompt = build_move_prompt(player.value)
        try:
            content = await asyncio.wait_for(
                self.source.request_move(player, prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise OracleUnavailable(f"Move request for {player} timed out")
        except Exception as e:
            raise OracleUnavailable(f"Move request for {player} failed: {e}")

        move = extract_move(content)
        if move is None:
            raise OracleMalformedResponse(
                f"No move in reply for {player}: {content!r}", content=content
            )
        return move

    async def get_move(self, player: Player) -> Move:
        """Move for `player`, falling back to random on any source failure."""
        if self.source is None:
            return self.random_move()

        try:
            move = await self._ask(player)
            logger.debug(f"{player} chose {move} via {self.source.name}")
            return move
        except OracleError as e:
            self.fallback_count += 1
            move = self.random_move()
            logger.warning(f"{e} - using random move {move}")
            return move
