# -*- coding: utf-8 -*-
"""Unit tests for rarity classification."""

from __future__ import annotations

import math

import pytest

from stacked_deck_tracker.exceptions import InvalidExchangeRateError
from stacked_deck_tracker.models.price_snapshot import CardPrice, Confidence
from stacked_deck_tracker.models.rarity import RarityTier
from stacked_deck_tracker.services.rarity import classify, classify_entry, is_valid_exchange_rate


@pytest.mark.parametrize(
    ("chaos", "expected"),
    [
        (140.0, RarityTier.EXTREMELY_RARE),  # 70%
        (139.9, RarityTier.RARE),
        (70.0, RarityTier.RARE),  # 35%
        (69.9, RarityTier.LESS_COMMON),
        (10.0, RarityTier.LESS_COMMON),  # 5%
        (9.9, RarityTier.COMMON),
        (0.0, RarityTier.COMMON),
    ],
)
def test_boundaries_are_inclusive_lower_bounds(chaos: float, expected: RarityTier) -> None:
    assert classify(chaos, 200.0) is expected


def test_expensive_card_is_extremely_rare() -> None:
    assert classify(1500, 200) is RarityTier.EXTREMELY_RARE


def test_cheap_card_is_common() -> None:
    assert classify(1, 200) is RarityTier.COMMON


def test_low_confidence_is_unknown_whatever_the_price() -> None:
    assert classify(1500, 200, Confidence.LOW) is RarityTier.UNKNOWN


def test_medium_confidence_is_classified() -> None:
    assert classify(80, 200, Confidence.MEDIUM) is RarityTier.RARE


@pytest.mark.parametrize("ratio", [0, -5, math.nan, math.inf])
def test_invalid_ratio_raises(ratio: float) -> None:
    with pytest.raises(InvalidExchangeRateError):
        classify(10, ratio)


def test_classify_entry_without_price_is_unknown() -> None:
    assert classify_entry(None, 200) is RarityTier.UNKNOWN


def test_classify_entry_uses_price_confidence() -> None:
    assert classify_entry(CardPrice(chaos_value=500, confidence=Confidence.LOW), 200) is RarityTier.UNKNOWN
    assert classify_entry(CardPrice(chaos_value=500), 200) is RarityTier.EXTREMELY_RARE


def test_is_valid_exchange_rate() -> None:
    assert is_valid_exchange_rate(150.5)
    assert not is_valid_exchange_rate(0)
    assert not is_valid_exchange_rate(math.nan)
    assert not is_valid_exchange_rate("abc")  # type: ignore[arg-type]
