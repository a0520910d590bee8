"""Abstract interface for per-session card tallies (session_cards)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.models.price_snapshot import PriceSource


class ISessionCardRepository(ABC):
    """Interface for persisting CardTally by (session_id, card_name)."""

    @abstractmethod
    async def get(self, session_id: UUID, card_name: str) -> Optional[CardTally]:
        """Return the tally, or None if the card has not dropped in the session."""
        ...

    @abstractmethod
    async def save(self, tally: CardTally) -> None:
        """Upsert a tally (by session_id, card_name)."""
        ...

    @abstractmethod
    async def list_by_session(self, session_id: UUID) -> list[CardTally]:
        """Return all tallies of the session, ordered by card name."""
        ...

    # -------------------------------------------------------------------------
    # Convenience: tallies are immutable, so read-modify-save
    # -------------------------------------------------------------------------

    async def increment(
        self,
        session_id: UUID,
        card_name: str,
        seen_at: datetime | None = None,
    ) -> CardTally:
        """Create the tally with count=1 or add one to it. Returns the saved tally."""
        seen_at = seen_at or datetime.now(UTC)
        tally = await self.get(session_id, card_name)
        updated = (
            CardTally.create(session_id, card_name, seen_at=seen_at)
            if tally is None
            else tally.incremented(seen_at)
        )
        await self.save(updated)
        return updated

    async def total_count(self, session_id: UUID) -> int:
        """Sum of counts over the session's tallies."""
        return sum(t.count for t in await self.list_by_session(session_id))

    async def set_price_hidden(
        self,
        session_id: UUID,
        card_name: str,
        source: PriceSource,
        hidden: bool,
    ) -> Optional[CardTally]:
        """Set the hide-price flag for one source. None if the tally does not exist."""
        tally = await self.get(session_id, card_name)
        if tally is None:
            return None
        updated = tally.with_price_hidden(source, hidden)
        await self.save(updated)
        return updated
