"""PriceSnapshot: point-in-time market price table for divination cards.

Supplied by the external price provider and treated as immutable. Carries one
price table per source (exchange and stash) plus the chaos cost of a stacked
deck at the time of the snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, IntEnum
from uuid import uuid4


class PriceSource(str, Enum):
    """Market data channel a price comes from."""

    EXCHANGE = "exchange"
    STASH = "stash"


class Confidence(IntEnum):
    """Quality signal on a price entry (stored as 1/2/3)."""

    HIGH = 1
    MEDIUM = 2
    LOW = 3


@dataclass(frozen=True, slots=True)
class CardPrice:
    """Price of one card in one source."""

    chaos_value: float
    divine_value: float = 0.0
    confidence: Confidence = Confidence.HIGH


@dataclass(frozen=True, slots=True)
class SourcePrices:
    """Price table of one source."""

    chaos_to_divine_ratio: float
    card_prices: dict[str, CardPrice] = field(default_factory=dict)

    def get(self, card_name: str) -> CardPrice | None:
        """Return the card's price, or None if the source has no entry."""
        return self.card_prices.get(card_name)


@dataclass(frozen=True, slots=True)
class PriceSnapshot:
    """Immutable price snapshot for a league."""

    id: str
    league: str
    fetched_at: datetime
    exchange: SourcePrices
    stash: SourcePrices
    stacked_deck_chaos_cost: float = 0.0

    def source(self, source: PriceSource) -> SourcePrices:
        """Return the price table for a source."""
        if source is PriceSource.EXCHANGE:
            return self.exchange
        return self.stash

    @classmethod
    def create(
        cls,
        league: str,
        *,
        exchange: SourcePrices,
        stash: SourcePrices,
        stacked_deck_chaos_cost: float = 0.0,
        fetched_at: datetime | None = None,
        id: str | None = None,
    ) -> PriceSnapshot:
        """Create a snapshot with a generated id."""
        return cls(
            id=id or str(uuid4()),
            league=league,
            fetched_at=fetched_at or datetime.now(UTC),
            exchange=exchange,
            stash=stash,
            stacked_deck_chaos_cost=stacked_deck_chaos_cost,
        )
