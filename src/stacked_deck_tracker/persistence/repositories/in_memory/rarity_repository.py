"""In-memory rarity repository (keyed by (game, league, card_name))."""

from __future__ import annotations

from stacked_deck_tracker.models.rarity import CardRarity
from stacked_deck_tracker.persistence.repositories.interfaces.rarity_repository import (
    IRarityRepository,
)


class InMemoryRarityRepository(IRarityRepository):
    """In-memory implementation of IRarityRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[tuple[str, str, str], CardRarity] = {}

    async def get(self, game: str, league: str, card_name: str) -> CardRarity | None:
        """Return the stored rarity, or None."""
        return self._store.get((game, league, card_name))

    async def save_batch(self, rarities: list[CardRarity]) -> None:
        """Upsert many rarities."""
        for r in rarities:
            self._store[(r.game, r.league, r.card_name)] = r

    async def list_by_league(self, game: str, league: str) -> list[CardRarity]:
        """Return every stored rarity for (game, league), ordered by card name."""
        rows = [r for (g, lg, _), r in self._store.items() if g == game and lg == league]
        return sorted(rows, key=lambda r: r.card_name)
