"""Client log watch (polling)."""

from stacked_deck_tracker.services.log_watch.log_watch_controller import (
    LogWatchController,
    TickResult,
)

__all__ = ["LogWatchController", "TickResult"]
