"""Boundary API."""

from stacked_deck_tracker.api.current_session_api import ApiResult, CurrentSessionApi

__all__ = ["ApiResult", "CurrentSessionApi"]
