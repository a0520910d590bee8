"""Stacked deck tracker: client log ingestion and live card session aggregation."""

from stacked_deck_tracker.api import ApiResult, CurrentSessionApi
from stacked_deck_tracker.config import get_settings
from stacked_deck_tracker.DI import Container
from stacked_deck_tracker.services import LogWatchController, SessionAggregator

__version__ = "0.1.0"
__all__ = [
    "ApiResult",
    "Container",
    "CurrentSessionApi",
    "LogWatchController",
    "SessionAggregator",
    "get_settings",
]
