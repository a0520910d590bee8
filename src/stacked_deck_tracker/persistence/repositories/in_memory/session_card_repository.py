"""In-memory session card repository (keyed by (session_id, card_name))."""

from __future__ import annotations

from uuid import UUID

from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.persistence.repositories.interfaces.session_card_repository import (
    ISessionCardRepository,
)


class InMemorySessionCardRepository(ISessionCardRepository):
    """In-memory implementation of ISessionCardRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[tuple[UUID, str], CardTally] = {}

    async def get(self, session_id: UUID, card_name: str) -> CardTally | None:
        """Return the tally, or None."""
        return self._store.get((session_id, card_name.strip()))

    async def save(self, tally: CardTally) -> None:
        """Upsert a tally."""
        self._store[(tally.session_id, tally.card_name)] = tally

    async def list_by_session(self, session_id: UUID) -> list[CardTally]:
        """Return all tallies of the session, ordered by card name."""
        tallies = [t for (sid, _), t in self._store.items() if sid == session_id]
        return sorted(tallies, key=lambda t: t.card_name)
