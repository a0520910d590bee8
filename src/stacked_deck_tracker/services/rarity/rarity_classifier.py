"""Rarity classification: card price as a share of one divine -> rarity tier."""

from __future__ import annotations

import math

from stacked_deck_tracker.exceptions import InvalidExchangeRateError
from stacked_deck_tracker.models.price_snapshot import CardPrice, Confidence
from stacked_deck_tracker.models.rarity import RarityTier

# Lower bounds (inclusive) in percent of one divine.
EXTREMELY_RARE_PERCENT = 70.0
RARE_PERCENT = 35.0
LESS_COMMON_PERCENT = 5.0


def is_valid_exchange_rate(ratio: float) -> bool:
    """Return True if ratio is a finite number greater than zero."""
    try:
        value = float(ratio)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value > 0


def classify(
    chaos_value: float,
    chaos_to_divine_ratio: float,
    confidence: Confidence = Confidence.HIGH,
) -> RarityTier:
    """Classify a price into a rarity tier.

    Low confidence gives UNKNOWN whatever the price.

    Raises:
        InvalidExchangeRateError: ratio is non-finite or <= 0.
    """
    if not is_valid_exchange_rate(chaos_to_divine_ratio):
        raise InvalidExchangeRateError(chaos_to_divine_ratio)
    if confidence is Confidence.LOW:
        return RarityTier.UNKNOWN

    percent = float(chaos_value) / float(chaos_to_divine_ratio) * 100
    if percent >= EXTREMELY_RARE_PERCENT:
        return RarityTier.EXTREMELY_RARE
    if percent >= RARE_PERCENT:
        return RarityTier.RARE
    if percent >= LESS_COMMON_PERCENT:
        return RarityTier.LESS_COMMON
    return RarityTier.COMMON


def classify_entry(price: CardPrice | None, chaos_to_divine_ratio: float) -> RarityTier:
    """Classify a price table entry; a card without a price is UNKNOWN."""
    if price is None:
        if not is_valid_exchange_rate(chaos_to_divine_ratio):
            raise InvalidExchangeRateError(chaos_to_divine_ratio)
        return RarityTier.UNKNOWN
    return classify(price.chaos_value, chaos_to_divine_ratio, price.confidence)
