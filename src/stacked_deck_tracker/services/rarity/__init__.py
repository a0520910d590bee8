"""Rarity classification and storage."""

from stacked_deck_tracker.services.rarity.rarity_classifier import (
    classify,
    classify_entry,
    is_valid_exchange_rate,
)
from stacked_deck_tracker.services.rarity.rarity_service import RarityService, RarityUpdateResult

__all__ = [
    "RarityService",
    "RarityUpdateResult",
    "classify",
    "classify_entry",
    "is_valid_exchange_rate",
]
