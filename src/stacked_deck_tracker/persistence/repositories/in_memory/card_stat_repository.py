"""In-memory card stat repository (keyed by (game, scope, card_name))."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from stacked_deck_tracker.models.card_stat import CardStat
from stacked_deck_tracker.persistence.repositories.interfaces.card_stat_repository import (
    ICardStatRepository,
)


class InMemoryCardStatRepository(ICardStatRepository):
    """In-memory implementation of ICardStatRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[tuple[str, str, str], CardStat] = {}

    async def increment(self, game: str, scope: str, card_name: str, at: datetime) -> CardStat:
        """Add one to the count (creating it at 1)."""
        k = (game, scope, card_name)
        current = self._store.get(k)
        if current is None:
            updated = CardStat(game=game, scope=scope, card_name=card_name, count=1, last_updated=at)
        else:
            updated = replace(current, count=current.count + 1, last_updated=at)
        self._store[k] = updated
        return updated

    async def get(self, game: str, scope: str, card_name: str) -> CardStat | None:
        """Return the stat, or None."""
        return self._store.get((game, scope, card_name))

    async def list_by_scope(self, game: str, scope: str) -> list[CardStat]:
        """Return every stat of (game, scope), ordered by card name."""
        rows = [s for (g, sc, _), s in self._store.items() if g == game and sc == scope]
        return sorted(rows, key=lambda s: s.card_name)
