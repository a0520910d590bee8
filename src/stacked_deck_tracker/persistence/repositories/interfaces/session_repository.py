# -*- coding: utf-8 -*-
"""Abstract interface for session and session summary storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.models.session_summary import SessionSummary


class ISessionRepository(ABC):
    """Interface for persisting SessionRecord and SessionSummary."""

    @abstractmethod
    async def get(self, session_id: UUID) -> Optional[SessionRecord]:
        """Return the session by id, or None if missing."""
        ...

    @abstractmethod
    async def save(self, session: SessionRecord) -> None:
        """Insert or update a session (by id)."""
        ...

    @abstractmethod
    async def get_active_for_game(self, game: str) -> Optional[SessionRecord]:
        """Return the active session for the game, or None."""
        ...

    @abstractmethod
    async def list_by_game(self, game: str) -> list[SessionRecord]:
        """Return all sessions for the game, newest first."""
        ...

    @abstractmethod
    async def deactivate_all(self, game: str, ended_at: datetime) -> int:
        """Close every active session of the game. Returns the number closed."""
        ...

    @abstractmethod
    async def save_summary(self, summary: SessionSummary) -> None:
        """Insert the summary of a finished session."""
        ...

    @abstractmethod
    async def get_summary(self, session_id: UUID) -> Optional[SessionSummary]:
        """Return the summary of a finished session, or None."""
        ...
