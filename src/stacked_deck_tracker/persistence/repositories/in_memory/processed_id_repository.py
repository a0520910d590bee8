# -*- coding: utf-8 -*-
"""In-memory processed id repository (keyed by (game, scope, processed_id))."""

from __future__ import annotations

from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId
from stacked_deck_tracker.persistence.repositories.interfaces.processed_id_repository import (
    IProcessedIdRepository,
)


def _key(game: str, scope: DedupScope, processed_id: str) -> tuple[str, str, str]:
    """Normalize key for storage."""
    return (game.strip(), scope.value, processed_id.strip())


class InMemoryProcessedIdRepository(IProcessedIdRepository):
    """In-memory implementation of IProcessedIdRepository. Preserves insertion order."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[tuple[str, str, str], ProcessedId] = {}

    async def list_by_game(self, game: str, scope: DedupScope) -> list[ProcessedId]:
        """Return all ids for (game, scope), oldest first."""
        game = game.strip()
        return [p for p in self._store.values() if p.game == game and p.scope == scope]

    async def add_batch(self, processed_ids: list[ProcessedId]) -> None:
        """Record multiple ids in one pass. Idempotent."""
        for p in processed_ids:
            k = _key(p.game, p.scope, p.processed_id)
            if k not in self._store:
                self._store[k] = p

    async def contains(self, game: str, scope: DedupScope, processed_id: str) -> bool:
        """Return True if the id is stored for (game, scope)."""
        return _key(game, scope, processed_id) in self._store

    async def clear(self, game: str, scope: DedupScope) -> int:
        """Delete every id for (game, scope)."""
        game = game.strip()
        doomed = [k for k in self._store if k[0] == game and k[1] == scope.value]
        for k in doomed:
            del self._store[k]
        return len(doomed)
