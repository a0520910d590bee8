"""Abstract interface for card rarity storage per (game, league, card)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from stacked_deck_tracker.models.rarity import CardRarity


class IRarityRepository(ABC):
    """Interface for persisting CardRarity."""

    @abstractmethod
    async def get(self, game: str, league: str, card_name: str) -> Optional[CardRarity]:
        """Return the stored rarity, or None."""
        ...

    @abstractmethod
    async def save_batch(self, rarities: list[CardRarity]) -> None:
        """Upsert many rarities in one unit of work."""
        ...

    @abstractmethod
    async def list_by_league(self, game: str, league: str) -> list[CardRarity]:
        """Return every stored rarity for (game, league), ordered by card name."""
        ...

    async def save(self, rarity: CardRarity) -> None:
        """Upsert one rarity. Default impl delegates to save_batch()."""
        await self.save_batch([rarity])
