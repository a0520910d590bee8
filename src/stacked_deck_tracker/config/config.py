# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, WATCH__TAIL_LINES.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GameId = Literal["poe1", "poe2"]


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "stacked-deck-tracker"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/stacked_deck_tracker.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 14
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False
    # Client log paths carry the user's home directory; keep only the last two parts.
    mask_log_paths: bool = True

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class DatabaseSettings(BaseSettings):
    """SQLAlchemy async database configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    url: str = Field(
        default="sqlite+aiosqlite:///stacked_deck_tracker.db",
        description="Async SQLAlchemy URL for the tracker database.",
    )
    echo: bool = Field(default=False, description="Echo SQL statements (debug).")


class WatchSettings(BaseSettings):
    """Configuration for the client log watch (polling)."""

    model_config = SettingsConfigDict(extra="ignore")

    poll_interval_seconds: float = Field(
        default=0.1,
        ge=0.01,
        le=10.0,
        description="Polling interval in seconds for the client log file.",
    )
    tail_lines: int = Field(
        default=10,
        ge=1,
        le=10_000,
        description="Number of trailing lines read from the log on each tick.",
    )
    skip_when_busy: bool = Field(
        default=True,
        description="Skip a tick while the previous one is still running (False queues it).",
    )
    require_active_session: bool = Field(
        default=True,
        description="Short-circuit ticks when no session is active for the watched game.",
    )


class SessionSettings(BaseSettings):
    """Configuration for session aggregation."""

    model_config = SettingsConfigDict(extra="ignore")

    recent_drops_size: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Size of the recent drops ring buffer (newest first).",
    )


class PriceSettings(BaseSettings):
    """Configuration for price snapshot reuse."""

    model_config = SettingsConfigDict(extra="ignore")

    snapshot_ttl_seconds: float = Field(
        default=6 * 3600,
        ge=0,
        description="How long a price snapshot is reused for new sessions of the same league.",
    )
    snapshot_cache_size: int = Field(default=32, ge=1, le=1024)


class GameSettings(BaseSettings):
    """Seed values for the settings store (selected game and client log paths)."""

    model_config = SettingsConfigDict(extra="ignore")

    selected_game: GameId = "poe1"
    poe1_log_path: Optional[str] = Field(default=None, description="Path to the PoE1 Client.txt.")
    poe2_log_path: Optional[str] = Field(default=None, description="Path to the PoE2 Client.txt.")


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, WATCH__TAIL_LINES.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    game: GameSettings = Field(default_factory=GameSettings)
    price: PriceSettings = Field(default_factory=PriceSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(watch={"tail_lines": 50})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from stacked_deck_tracker.config import get_settings

        settings = get_settings()
        interval = settings.watch.poll_interval_seconds
    """
    return Settings()
