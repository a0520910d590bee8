"""Abstract interface for processed id storage (in-memory, DB, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId


class IProcessedIdRepository(ABC):
    """Interface for persisting ProcessedId (deduplication of counted card drops)."""

    @abstractmethod
    async def list_by_game(self, game: str, scope: DedupScope) -> list[ProcessedId]:
        """Return all ids for (game, scope), oldest first."""
        ...

    @abstractmethod
    async def add_batch(self, processed_ids: list[ProcessedId]) -> None:
        """Record multiple ids. Idempotent (re-adding an existing key is a no-op)."""
        ...

    @abstractmethod
    async def clear(self, game: str, scope: DedupScope) -> int:
        """Delete every id for (game, scope). Returns the number removed."""
        ...

    async def add(self, processed_id: ProcessedId) -> None:
        """Record one id. Default impl delegates to add_batch()."""
        await self.add_batch([processed_id])

    async def contains(self, game: str, scope: DedupScope, processed_id: str) -> bool:
        """Return True if the id is stored for (game, scope)."""
        rows = await self.list_by_game(game, scope)
        return any(r.processed_id == processed_id for r in rows)
