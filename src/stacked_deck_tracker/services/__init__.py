# -*- coding: utf-8 -*-
"""Application services."""

from stacked_deck_tracker.services.dedup import DedupStore
from stacked_deck_tracker.services.event_parser import CardEntry, CardParseResult, parse_cards
from stacked_deck_tracker.services.log_watch import LogWatchController, TickResult
from stacked_deck_tracker.services.rarity import (
    RarityService,
    RarityUpdateResult,
    classify,
    classify_entry,
)
from stacked_deck_tracker.services.session import (
    CurrentSessionData,
    SessionAggregator,
    StopSessionResult,
)
from stacked_deck_tracker.services.tail_reader import TailReader, read_last_lines

__all__ = [
    "CardEntry",
    "CardParseResult",
    "CurrentSessionData",
    "DedupStore",
    "LogWatchController",
    "RarityService",
    "RarityUpdateResult",
    "SessionAggregator",
    "StopSessionResult",
    "TailReader",
    "TickResult",
    "classify",
    "classify_entry",
    "parse_cards",
    "read_last_lines",
]
