"""Match lifecycle state machine.

    idle --start--> countdown(3) --tick--> ... --> countdown(0)
    countdown(0) --play--> playing --(both moves)--> result
    playing --(failure)--> idle
    result --start--> countdown(3)

`run_round` drives one full round with timed ticks. `reset` cancels a pending
countdown and returns to idle.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from arena.exceptions import InvalidTransition, ListenerFailed, RoundAborted

from .models import EngineStatus, MatchRecord, MatchState, Move, Player
from .rules import determine_outcome

logger = logging.getLogger(__name__)

MatchListener = Callable[[MatchRecord], object]


class MatchEngine:
    """Drives one match at a time and emits a MatchRecord per completed round."""

    def __init__(
        self,
        oracle,
        countdown_start: int = 3,
        tick_seconds: float = 1.0,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], int] | None = None,
    ):
        if countdown_start < 0:
            raise ValueError(f"countdown_start must be non-negative, got {countdown_start}")

        self._oracle = oracle
        self.countdown_start = countdown_start
        self.tick_seconds = tick_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._id_factory = id_factory or itertools.count(1).__next__
        self._listeners: list[MatchListener] = []

        self._state = MatchState.IDLE
        self._countdown = countdown_start
        self._round_number = 1
        self._last_record: MatchRecord | None = None
        self._countdown_task: asyncio.Task | None = None

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def countdown(self) -> int:
        return self._countdown

    @property
    def round_number(self) -> int:
        """Number the next completed round will carry."""
        return self._round_number

    @property
    def last_record(self) -> MatchRecord | None:
        return self._last_record

    @property
    def is_busy(self) -> bool:
        return self._state in (MatchState.COUNTDOWN, MatchState.PLAYING)

    def status(self) -> EngineStatus:
        return EngineStatus(
            state=self._state,
            countdown=self._countdown,
            round_number=self._round_number,
            last_record=self._last_record,
        )

    def subscribe(self, listener: MatchListener) -> None:
        """Call `listener` synchronously with every emitted MatchRecord."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> None:
        """idle/result -> countdown(start)."""
        if self._state not in (MatchState.IDLE, MatchState.RESULT):
            raise InvalidTransition(f"Cannot start a round while {self._state}")
        self._state = MatchState.COUNTDOWN
        self._countdown = self.countdown_start
        logger.debug(f"Round {self._round_number}: countdown from {self._countdown}")

    def tick(self) -> int:
        """countdown(n) -> countdown(n-1). Returns the remaining count."""
        if self._state is not MatchState.COUNTDOWN:
            raise InvalidTransition(f"Cannot tick while {self._state}")
        if self._countdown == 0:
            raise InvalidTransition("Countdown already reached 0")
        self._countdown -= 1
        return self._countdown

    async def play(self) -> MatchRecord:
        """countdown(0) -> playing -> result, or back to idle on failure.

        Raises ListenerFailed after the round has completed if a subscriber
        (history, settlement) raised on the emitted record.
        """
        if self._state is not MatchState.COUNTDOWN or self._countdown != 0:
            raise InvalidTransition(
                f"Cannot play from {self._state}({self._countdown})"
            )

        self._state = MatchState.PLAYING
        try:
            # Join both requests; one failing does not cancel the other
            results = await asyncio.gather(
                self._oracle.get_move(Player.AI_1),
                self._oracle.get_move(Player.AI_2),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            ai1_move, ai2_move = Move(results[0]), Move(results[1])
            outcome = determine_outcome(ai1_move, ai2_move)
            record = MatchRecord(
                id=self._id_factory(),
                round_number=self._round_number,
                ai1_move=ai1_move,
                ai2_move=ai2_move,
                outcome=outcome,
                timestamp=self._clock(),
            )
        except asyncio.CancelledError:
            self._state = MatchState.IDLE
            raise
        except Exception as e:
            self._state = MatchState.IDLE
            logger.error(f"Round {self._round_number} aborted: {e}")
            raise RoundAborted(f"Round {self._round_number} aborted: {e}") from e

        self._last_record = record
        self._round_number += 1
        self._state = MatchState.RESULT
        logger.info(
            f"Round {record.round_number} (match {record.id}): "
            f"{record.describe()} -> {record.outcome}"
        )

        errors = self._emit(record)
        if errors:
            raise ListenerFailed(
                f"{len(errors)} listener(s) failed on match {record.id}: {errors[0]}",
                record=record,
                errors=errors,
            )
        return record

    def reset(self) -> None:
        """Cancel any pending countdown and return to idle."""
        if self._state is MatchState.PLAYING:
            raise InvalidTransition("Cannot reset while moves are being requested")
        if self._countdown_task is not None and not self._countdown_task.done():
            self._countdown_task.cancel()
        self._countdown_task = None
        self._state = MatchState.IDLE
        self._countdown = self.countdown_start

    # ------------------------------------------------------------------
    # Driving a round
    # ------------------------------------------------------------------

    async def _run_countdown(self) -> None:
        while self._state is MatchState.COUNTDOWN and self._countdown > 0:
            await asyncio.sleep(self.tick_seconds)
            if self._state is not MatchState.COUNTDOWN:
                return
            self.tick()

    async def run_round(self) -> MatchRecord | None:
        """Start, count down on the tick cadence, then play.

        Returns None if the countdown was cancelled by `reset`.
        """
        self.start()
        task = asyncio.create_task(self._run_countdown())
        self._countdown_task = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            self._countdown_task = None
            self._state = MatchState.IDLE
            raise
        finally:
            if self._countdown_task is task:
                self._countdown_task = None

        if task.cancelled() or self._state is not MatchState.COUNTDOWN:
            logger.info(f"Round {self._round_number} cancelled during countdown")
            return None
        if task.exception() is not None:
            self._state = MatchState.IDLE
            raise RoundAborted(f"Countdown failed: {task.exception()}")

        return await self.play()

    def _emit(self, record: MatchRecord) -> list[Exception]:
        """Call every listener; one failing does not skip the rest."""
        errors: list[Exception] = []
        for listener in list(self._listeners):
            try:
                listener(record)
            except Exception as e:
                logger.exception(f"Match listener {listener!r} failed for match {record.id}: {e}")
                errors.append(e)
        return errors
