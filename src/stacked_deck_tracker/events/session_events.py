"""Session events emitted by SessionAggregator for presentation layers."""

from __future__ import annotations

from datetime import datetime

from bubus import BaseEvent  # type: ignore[import-untyped]


class SessionStateChangedEvent(BaseEvent[None]):
    """Emitted when a session starts or stops."""

    game: str
    is_active: bool
    session_id: str
    league: str
    started_at: datetime
    ended_at: datetime | None = None
    total_count: int = 0


class SessionDataUpdatedEvent(BaseEvent[None]):
    """Emitted after the running totals of the active session change.

    Carries only identifiers and counts; subscribers call get_current_session() for the full view.
    """

    game: str
    session_id: str
    total_count: int
    card_name: str | None = None
    """Card that caused the update; None for price or visibility changes."""
