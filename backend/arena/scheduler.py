"""Job scheduler using APScheduler."""

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from arena.exceptions import InvalidTransition, ListenerFailed, RoundAborted
from arena.runtime import Arena

logger = logging.getLogger(__name__)


async def match_job(arena: Arena) -> None:
    """Play one round; an aborted or overlapping round is logged and skipped."""
    try:
        record = await arena.play_round()
    except RoundAborted as e:
        logger.error(f"Scheduled round aborted: {e}")
        return
    except InvalidTransition as e:
        logger.warning(f"Scheduled round skipped: {e}")
        return
    except ListenerFailed as e:
        logger.error(
            f"Scheduled round {e.record.round_number} completed but was not fully handled: {e}"
        )
        return

    if record is not None:
        logger.info(
            f"Scheduled round {record.round_number} complete: {record.outcome} "
            f"({len(arena.store.history)} matches played)"
        )


def create_scheduler(arena: Arena) -> AsyncIOScheduler:
    """Scheduler that plays a round every `match.interval_seconds`."""
    scheduler = AsyncIOScheduler()
    interval = arena.settings.match.interval_seconds

    scheduler.add_job(
        match_job,
        IntervalTrigger(seconds=interval),
        args=[arena],
        id="arena-match",
        name="Arena: Play Round",
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Registered job: Arena Play Round (every {interval}s)")
    return scheduler


async def run_forever(arena: Arena) -> None:
    """Start the scheduler and keep the event loop alive until cancelled."""
    scheduler = create_scheduler(arena)
    try:
        logger.info("✓ Scheduler starting...")
        logger.info("Press Ctrl+C to stop\n")
        scheduler.start()
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        logger.info("✓ Scheduler stopped cleanly")
