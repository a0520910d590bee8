"""Abstract interface for cascaded card counts (all-time and per league)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from stacked_deck_tracker.models.card_stat import CardStat


class ICardStatRepository(ABC):
    """Interface for persisting CardStat by (game, scope, card_name)."""

    @abstractmethod
    async def increment(
        self,
        game: str,
        scope: str,
        card_name: str,
        at: datetime,
    ) -> CardStat:
        """Add one to the count (creating it at 1). Returns the saved stat."""
        ...

    @abstractmethod
    async def get(self, game: str, scope: str, card_name: str) -> Optional[CardStat]:
        """Return the stat, or None."""
        ...

    @abstractmethod
    async def list_by_scope(self, game: str, scope: str) -> list[CardStat]:
        """Return every stat of (game, scope), ordered by card name."""
        ...

    async def total_count(self, game: str, scope: str) -> int:
        """Sum of counts for (game, scope)."""
        return sum(s.count for s in await self.list_by_scope(game, scope))
