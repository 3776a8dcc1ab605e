"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire

from arena import __version__
from arena.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings, app=None) -> bool:
    """
    Initialize Logfire with instrumentation for the arena.

    Must be called ONCE at application startup, before any rounds run.

    Instruments:
    - PydanticAI agents (move agent)
    - HTTPX clients (OpenRouter, Solana RPC)
    - FastAPI app, when given
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing Logfire token
        app: Optional FastAPI app to instrument

    Returns:
        True if Logfire was configured.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="rps-arena",
            service_version=__version__,
            environment="paper" if settings.wallet.paper_mode else "live",
        )

        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()
        if app is not None:
            logfire.instrument_fastapi(app)

        # Bridge Python logging to Logfire
        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("✓ Logfire cloud tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        # Continue running - observability is optional
        return False
