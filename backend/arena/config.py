"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arena.llm_providers import OpenAIModel, OpenRouterModel, get_model_string

logger = logging.getLogger(__name__)


class MatchConfig(BaseModel):
    """Match lifecycle timing."""

    countdown_start: int = 3
    tick_seconds: float = 1.0
    interval_seconds: int = 10  # Scheduler cadence between rounds
    auto_play: bool = False


class BettingConfig(BaseModel):
    """Pari-mutuel pool and ledger parameters."""

    initial_balance: float = 1000.0
    default_odds: float = 2.0  # Fair-coin odds when a side has no stake
    odds_places: int = 2
    amount_places: int = 4
    max_amount: float = 1_000_000_000.0  # Ceiling for any single wager or opening balance
    recent_bets_limit: int = 10


class OracleConfig(BaseModel):
    """Move generation parameters."""

    provider: Literal["openrouter", "agent", "random"] = "openrouter"
    model: str = OpenRouterModel.DEEPSEEK_V3_FREE.value
    agent_model: str = get_model_string(OpenAIModel.GPT_5_NANO)
    timeout_seconds: float = 15.0


class WalletConfig(BaseModel):
    """Wallet balance provider parameters."""

    paper_mode: bool = True
    paper_balance: float = 10.0
    rpc_url: str = "https://api.devnet.solana.com"


class ServerConfig(BaseModel):
    """HTTP server parameters."""

    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")

    # API Keys
    openrouter_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    logfire_token: str = ""

    # Nested configuration sections
    match: MatchConfig = Field(default_factory=MatchConfig)
    betting: BettingConfig = Field(default_factory=BettingConfig)
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    wallet: WalletConfig = Field(default_factory=WalletConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.warning(
                f"Config file not found: {config_path}. "
                "Using defaults. Run 'python -m arena init' to create it."
            )
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["match", "betting", "oracle", "wallet", "server"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name]

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    new_section = section.__class__(**section_dict)
                    setattr(self, section_name, new_section)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
