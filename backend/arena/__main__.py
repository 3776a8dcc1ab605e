"""Arena CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from arena import __version__
from arena.betting.models import short_address
from arena.config import Settings, get_settings
from arena.exceptions import ArenaError, ListenerFailed, RoundAborted
from arena.runtime import Arena, create_arena

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# RPS Arena Configuration
# API keys and secrets belong in .env, not here.

match:
  countdown_start: 3
  tick_seconds: 1.0
  interval_seconds: 10
  auto_play: false

betting:
  initial_balance: 1000
  default_odds: 2.0
  odds_places: 2
  amount_places: 4
  max_amount: 1000000000
  recent_bets_limit: 10

oracle:
  provider: openrouter   # openrouter | agent | random
  model: deepseek/deepseek-chat-v3-0324:free
  agent_model: openai:gpt-5-nano
  timeout_seconds: 15

wallet:
  paper_mode: true
  paper_balance: 10
  rpc_url: https://api.devnet.solana.com

server:
  host: 127.0.0.1
  port: 8000
"""


def _init_logfire(settings: Settings, app=None) -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from arena.observability import initialize_logfire

        initialize_logfire(settings, app)
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def cmd_init(args: argparse.Namespace) -> int:
    """Create the data directory and a config.yaml template."""
    data_dir = Path("data").resolve()

    try:
        data_dir.mkdir(exist_ok=True)
        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE)
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Add OPENROUTER_API_KEY to .env (or set oracle.provider: random)")
        print("2. Run 'python -m arena config' to verify configuration")
        print("3. Run 'python -m arena play' to play a round\n")
        return 0

    except OSError as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== RPS Arena Configuration ===\n")
        print(f"Data Directory: {settings.data_dir}\n")

        print("Match:")
        print(f"  Countdown: {settings.match.countdown_start} ticks of {settings.match.tick_seconds}s")
        print(f"  Scheduler Interval: {settings.match.interval_seconds}s")
        print(f"  Auto Play: {settings.match.auto_play}\n")

        print("Betting:")
        print(f"  Initial Balance: {settings.betting.initial_balance:,.2f}")
        print(f"  Default Odds: {settings.betting.default_odds}x")
        print(f"  Odds Precision: {settings.betting.odds_places} places")
        print(f"  Amount Precision: {settings.betting.amount_places} places")
        print(f"  Max Amount: {settings.betting.max_amount:,.2f}\n")

        print("Oracle:")
        print(f"  Provider: {settings.oracle.provider}")
        print(f"  Model: {settings.oracle.model}")
        print(f"  Agent Model: {settings.oracle.agent_model}")
        print(f"  Timeout: {settings.oracle.timeout_seconds}s\n")

        print("Wallet:")
        print(f"  Mode: {'PAPER' if settings.wallet.paper_mode else 'RPC'}")
        print(f"  RPC URL: {settings.wallet.rpc_url}\n")

        print("API Keys:")
        print(f"  OpenRouter: {'✓ Set' if settings.openrouter_api_key else '✗ Not set'}")
        print(f"  OpenAI: {'✓ Set' if settings.openai_api_key else '✗ Not set'}")
        print(f"  Anthropic: {'✓ Set' if settings.anthropic_api_key else '✗ Not set'}")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1


async def _play(arena: Arena, args: argparse.Namespace) -> int:
    if args.wallet:
        account = await arena.connect_wallet(args.address)
    else:
        account = arena.store.open_account(args.address)
    print(f"Spectator: {short_address(account.address)}  Balance: {account.balance}\n")

    for _ in range(args.rounds):
        if args.bet_on:
            try:
                bet = arena.pool.place_wager(account.address, args.bet_on, args.amount)
                print(
                    f"Bet #{bet.id}: {bet.amount} on {bet.player} "
                    f"(odds {arena.pool.current_odds(bet.player)}x)"
                )
            except ArenaError as e:
                print(f"Bet rejected: {e}")

        try:
            record = await arena.play_round()
        except RoundAborted as e:
            print(f"❌ {e}\n")
            continue
        except ListenerFailed as e:
            print(f"❌ {e}\n")
            record = e.record
        if record is None:
            continue

        result = "Draw!" if record.outcome == "draw" else f"{record.outcome} Wins!"
        print(f"Round {record.round_number}: {record.describe()}  {result}")

        if account.bet_history and account.bet_history[0].match_id == record.id:
            bet = account.bet_history[0]
            if bet.won:
                print(f"  ✓ Won {bet.payout} at {bet.odds}x")
            else:
                print(f"  ✗ Lost {bet.amount}")
        print(f"  Balance: {account.balance}\n")

    if arena.oracle.fallback_count:
        print(f"Random fallback moves used: {arena.oracle.fallback_count}\n")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    """Play rounds in-process, optionally wagering before each."""
    settings = get_settings()
    if args.random:
        settings = settings.model_copy(
            update={"oracle": settings.oracle.model_copy(update={"provider": "random"})}
        )
    if args.fast:
        settings = settings.model_copy(
            update={"match": settings.match.model_copy(update={"tick_seconds": 0.0})}
        )
    _init_logfire(settings)

    try:
        print("\n=== RPS Arena ===\n")
        return asyncio.run(_play(create_arena(settings), args))
    except KeyboardInterrupt:
        print("\n\nInterrupted.\n")
        return 0
    except Exception as e:
        logger.error(f"Play failed: {e}", exc_info=True)
        print(f"\n❌ Play failed: {e}\n")
        return 1


def cmd_run(args: argparse.Namespace) -> int:
    """Play rounds on the scheduler interval until interrupted."""
    from arena.scheduler import run_forever

    try:
        if args.debug:
            logging.getLogger().setLevel(logging.DEBUG)

        settings = get_settings()
        _init_logfire(settings)

        print("\n=== RPS Arena Autoplay ===\n")
        print(f"Version: {__version__}")
        print(f"Oracle: {settings.oracle.provider}")
        print(f"Interval: {settings.match.interval_seconds}s\n")

        asyncio.run(run_forever(create_arena(settings)))
        return 0

    except KeyboardInterrupt:
        print("\n\nReceived interrupt signal. Shutting down...\n")
        return 0
    except Exception as e:
        logger.error(f"Failed to start autoplay: {e}", exc_info=True)
        print(f"\nFailed to start: {e}\n")
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from arena.api.server import create_app

    settings = get_settings()
    app = create_app(create_arena(settings))
    _init_logfire(settings, app)

    uvicorn.run(
        app,
        host=args.host or settings.server.host,
        port=args.port or settings.server.port,
        log_level="debug" if args.debug else "info",
    )
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RPS Arena: AI rock-paper-scissors with a spectator betting pool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"RPS Arena {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory and configuration file",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_play = subparsers.add_parser(
        "play",
        help="Play rounds in the terminal",
    )
    parser_play.add_argument("--rounds", type=int, default=1, help="Rounds to play")
    parser_play.add_argument(
        "--bet-on",
        choices=["AI-1", "AI-2"],
        help="Place a wager on this player before each round",
    )
    parser_play.add_argument("--amount", default="10", help="Wager amount")
    parser_play.add_argument("--address", default="demo-spectator", help="Spectator address")
    parser_play.add_argument(
        "--wallet",
        action="store_true",
        help="Seed the spectator balance from the wallet provider",
    )
    parser_play.add_argument("--random", action="store_true", help="Use random moves only")
    parser_play.add_argument("--fast", action="store_true", help="Skip countdown delays")
    parser_play.set_defaults(func=cmd_play)

    parser_run = subparsers.add_parser(
        "run",
        help="Play rounds on the scheduler interval",
    )
    parser_run.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser_run.set_defaults(func=cmd_run)

    parser_serve = subparsers.add_parser(
        "serve",
        help="Serve the HTTP API",
    )
    parser_serve.add_argument("--host", help="Bind host")
    parser_serve.add_argument("--port", type=int, help="Bind port")
    parser_serve.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
