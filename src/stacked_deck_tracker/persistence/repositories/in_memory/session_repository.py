"""In-memory session repository (keyed by session id)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.models.session_summary import SessionSummary
from stacked_deck_tracker.persistence.repositories.interfaces.session_repository import (
    ISessionRepository,
)


def _by_started_at(session: SessionRecord) -> datetime:
    """Sort key: started_at."""
    return session.started_at


class InMemorySessionRepository(ISessionRepository):
    """In-memory implementation of ISessionRepository."""

    def __init__(self) -> None:
        """Initialize empty in-memory stores."""
        self._store: dict[UUID, SessionRecord] = {}
        self._summaries: dict[UUID, SessionSummary] = {}

    async def get(self, session_id: UUID) -> SessionRecord | None:
        """Return the session by id, or None if missing."""
        return self._store.get(session_id)

    async def save(self, session: SessionRecord) -> None:
        """Insert or update a session (by id)."""
        self._store[session.id] = session

    async def get_active_for_game(self, game: str) -> SessionRecord | None:
        """Return the active session for the game, or None."""
        game = game.strip()
        for s in self._store.values():
            if s.game == game and s.is_active:
                return s
        return None

    async def list_by_game(self, game: str) -> list[SessionRecord]:
        """Return all sessions for the game, newest first."""
        game = game.strip()
        sessions = [s for s in self._store.values() if s.game == game]
        return sorted(sessions, key=_by_started_at, reverse=True)

    async def deactivate_all(self, game: str, ended_at: datetime) -> int:
        """Close every active session of the game."""
        game = game.strip()
        active = [s for s in self._store.values() if s.game == game and s.is_active]
        for s in active:
            self._store[s.id] = s.with_ended(s.ended_at or ended_at)
        return len(active)

    async def save_summary(self, summary: SessionSummary) -> None:
        """Insert the summary of a finished session."""
        self._summaries[summary.session_id] = summary

    async def get_summary(self, session_id: UUID) -> SessionSummary | None:
        """Return the summary of a finished session, or None."""
        return self._summaries.get(session_id)
