"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Ranking
    placement_games: int = Field(
        default=3,
        ge=0,
        description="Placement matches a new player plays before ranked rules apply",
    )
    ranks_config_path: Path = Field(
        default=Path("ranks.yaml"),
        description="Path to rank tiers configuration file",
    )

    # Player store
    store_backend: Literal["json", "sql"] = Field(
        default="json",
        description="Backend used to persist player records",
    )
    players_path: Path = Field(
        default=Path("data/players.json"),
        description="Player records file for the JSON backend",
    )
    database_url: str = Field(
        default="sqlite:///data/rp_tracker.db",
        description="SQLAlchemy connection string for the SQL backend",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for rotating log files",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
