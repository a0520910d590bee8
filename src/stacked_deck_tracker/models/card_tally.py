"""CardTally: per-card running count within a session."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from stacked_deck_tracker.models.price_snapshot import PriceSource


@dataclass(frozen=True, slots=True)
class CardTally:
    """How many times a card dropped in one session.

    Identity: (session_id, card_name).
    """

    session_id: UUID
    card_name: str
    count: int
    first_seen_at: datetime
    last_seen_at: datetime
    hide_price_exchange: bool = False
    """Exclude this card's exchange price from session totals."""
    hide_price_stash: bool = False
    """Exclude this card's stash price from session totals."""

    def is_price_hidden(self, source: PriceSource) -> bool:
        """Return True if the card's price is hidden for the given source."""
        if source is PriceSource.EXCHANGE:
            return self.hide_price_exchange
        return self.hide_price_stash

    def incremented(self, seen_at: datetime | None = None) -> CardTally:
        """Return a copy with count + 1 and last_seen_at updated."""
        return replace(self, count=self.count + 1, last_seen_at=seen_at or datetime.now(UTC))

    def with_price_hidden(self, source: PriceSource, hidden: bool) -> CardTally:
        """Return a copy with the hide flag set for one price source."""
        if source is PriceSource.EXCHANGE:
            return replace(self, hide_price_exchange=hidden)
        return replace(self, hide_price_stash=hidden)

    @classmethod
    def create(
        cls,
        session_id: UUID,
        card_name: str,
        *,
        seen_at: datetime | None = None,
    ) -> CardTally:
        """Create the tally for the first drop of a card in a session (count=1)."""
        card_name = card_name.strip()
        if not card_name:
            raise ValueError("card_name must be non-empty")
        now = seen_at or datetime.now(UTC)
        return cls(
            session_id=session_id,
            card_name=card_name,
            count=1,
            first_seen_at=now,
            last_seen_at=now,
        )
