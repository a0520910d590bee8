"""Rarity tiers and the per-league stored rarity of a card."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import IntEnum


class RarityTier(IntEnum):
    """Coarse value classification of a card (lower is rarer)."""

    UNKNOWN = 0
    EXTREMELY_RARE = 1
    RARE = 2
    LESS_COMMON = 3
    COMMON = 4


@dataclass(frozen=True, slots=True)
class CardRarity:
    """Stored rarity of a card in a league.

    Identity: (game, league, card_name). override_rarity is a user correction
    that wins over rarity until reliable price data clears it.
    """

    game: str
    league: str
    card_name: str
    rarity: RarityTier
    override_rarity: RarityTier | None = None
    last_updated: datetime | None = None

    @property
    def effective(self) -> RarityTier:
        """Override if present, else the computed rarity."""
        return self.override_rarity if self.override_rarity is not None else self.rarity

    def with_rarity(self, rarity: RarityTier, *, clear_override: bool) -> CardRarity:
        """Return a copy with a new computed rarity."""
        return replace(
            self,
            rarity=rarity,
            override_rarity=None if clear_override else self.override_rarity,
            last_updated=datetime.now(UTC),
        )

    def with_override(self, override: RarityTier | None) -> CardRarity:
        """Return a copy with a user override set (None removes it)."""
        return replace(self, override_rarity=override, last_updated=datetime.now(UTC))
