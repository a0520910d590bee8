"""Configuration subpackage."""

from stacked_deck_tracker.config.config import (
    AppSettings,
    DatabaseSettings,
    GameId,
    GameSettings,
    LoggingSettings,
    PriceSettings,
    SessionSettings,
    Settings,
    WatchSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "GameId",
    "GameSettings",
    "LoggingSettings",
    "PriceSettings",
    "SessionSettings",
    "Settings",
    "WatchSettings",
    "get_settings",
]
