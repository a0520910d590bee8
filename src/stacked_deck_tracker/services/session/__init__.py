"""Session aggregation service."""

from stacked_deck_tracker.services.session.dto import (
    ActiveSessionInfo,
    CardEntryView,
    CurrentSessionData,
    PriceView,
    RecentDrop,
    SessionTotals,
    SourceTotals,
    StopSessionResult,
)
from stacked_deck_tracker.services.session.session_aggregator import (
    CURRENT_SESSION,
    SessionAggregator,
    calculate_totals,
)

__all__ = [
    "CURRENT_SESSION",
    "ActiveSessionInfo",
    "CardEntryView",
    "CurrentSessionData",
    "PriceView",
    "RecentDrop",
    "SessionAggregator",
    "SessionTotals",
    "SourceTotals",
    "StopSessionResult",
    "calculate_totals",
]
