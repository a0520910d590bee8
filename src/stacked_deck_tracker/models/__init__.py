# -*- coding: utf-8 -*-
"""Domain models."""

from stacked_deck_tracker.models.card_event import CardEvent
from stacked_deck_tracker.models.card_stat import ALL_TIME_SCOPE, CardStat
from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.models.price_snapshot import (
    CardPrice,
    Confidence,
    PriceSnapshot,
    PriceSource,
    SourcePrices,
)
from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId
from stacked_deck_tracker.models.rarity import CardRarity, RarityTier
from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.models.session_summary import SessionSummary
from stacked_deck_tracker.models.watch_target import WatchTarget

__all__ = [
    "ALL_TIME_SCOPE",
    "CardEvent",
    "CardPrice",
    "CardRarity",
    "CardStat",
    "CardTally",
    "Confidence",
    "DedupScope",
    "PriceSnapshot",
    "PriceSource",
    "ProcessedId",
    "RarityTier",
    "SessionRecord",
    "SessionSummary",
    "SourcePrices",
    "WatchTarget",
]
