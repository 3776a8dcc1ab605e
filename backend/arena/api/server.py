"""FastAPI server for the arena: accounts, wagers, pool, matches."""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from arena import __version__
from arena.betting.models import Bet, PoolView
from arena.exceptions import (
    ActiveBetExists,
    ArenaError,
    InsufficientFunds,
    InvalidTransition,
    InvalidWager,
    ListenerFailed,
    RoundAborted,
    UnknownAccount,
)
from arena.game.models import EngineStatus, MatchRecord, Player
from arena.runtime import Arena
from arena.services.wallet import WalletAPIError, WalletDisconnectedError
from arena.store import SpectatorAccount

logger = logging.getLogger(__name__)

# Most specific first; InvalidAccount is an InvalidWager
_STATUS_CODES: list[tuple[type[ArenaError], int]] = [
    (InsufficientFunds, 402),
    (ActiveBetExists, 409),
    (InvalidTransition, 409),
    (UnknownAccount, 404),
    (RoundAborted, 503),
    (ListenerFailed, 500),
    (InvalidWager, 400),
]


class AccountCreate(BaseModel):
    address: str
    initial_balance: Decimal | None = None
    from_wallet: bool = False


class WagerRequest(BaseModel):
    address: str
    player: str | None = None
    amount: Decimal | None = None


class AccountView(BaseModel):
    address: str
    balance: Decimal
    active_bet: Bet | None = None
    bet_history: list[Bet] = Field(default_factory=list)

    @classmethod
    def from_account(cls, account: SpectatorAccount) -> "AccountView":
        return cls(
            address=account.address,
            balance=account.balance,
            active_bet=account.active_bet,
            bet_history=list(account.bet_history),
        )


class OddsView(BaseModel):
    player: Player
    odds: Decimal


def create_app(arena: Arena) -> FastAPI:
    """Build the API around an existing Arena."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler = None
        if arena.settings.match.auto_play:
            from arena.scheduler import create_scheduler

            scheduler = create_scheduler(arena)
            scheduler.start()
            logger.info("Auto-play scheduler started")
        yield
        if scheduler is not None:
            scheduler.shutdown(wait=False)
            logger.info("Auto-play scheduler stopped")

    app = FastAPI(title="RPS Arena API", version=__version__, lifespan=lifespan)
    app.state.arena = arena

    app.add_middleware(
        CORSMiddleware,
        allow_origins=arena.settings.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ArenaError)
    async def arena_error_handler(request: Request, exc: ArenaError) -> JSONResponse:
        status_code = 400
        for exc_type, code in _STATUS_CODES:
            if isinstance(exc, exc_type):
                status_code = code
                break
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.exception_handler(WalletAPIError)
    async def wallet_error_handler(request: Request, exc: WalletAPIError) -> JSONResponse:
        status_code = 400 if isinstance(exc, WalletDisconnectedError) else 502
        logger.warning(f"Wallet lookup failed: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "rps-arena", "version": __version__}

    @app.post("/api/accounts", status_code=201)
    async def open_account(body: AccountCreate) -> AccountView:
        if body.from_wallet and body.initial_balance is None:
            account = await arena.connect_wallet(body.address)
        else:
            account = arena.store.open_account(body.address, body.initial_balance)
        return AccountView.from_account(account)

    @app.get("/api/accounts/{address}")
    async def get_account(address: str) -> AccountView:
        return AccountView.from_account(arena.store.get_account(address))

    @app.post("/api/bets", status_code=201)
    async def place_bet(body: WagerRequest) -> Bet:
        return arena.pool.place_wager(body.address, body.player, body.amount)

    @app.get("/api/pool")
    async def get_pool(limit: int | None = Query(None, ge=0)) -> PoolView:
        return arena.pool.view(recent_limit=limit)

    @app.get("/api/odds/{player}")
    async def get_odds(player: Player) -> OddsView:
        return OddsView(player=player, odds=arena.pool.current_odds(player))

    @app.get("/api/history")
    async def get_history(limit: int = Query(50, ge=0)) -> list[MatchRecord]:
        return list(arena.store.history.records[:limit])

    @app.get("/api/engine")
    async def get_engine() -> EngineStatus:
        return arena.engine.status()

    @app.post("/api/matches", status_code=201)
    async def play_match() -> MatchRecord:
        record = await arena.play_round()
        if record is None:
            raise InvalidTransition("Round was cancelled before play")
        return record

    return app
