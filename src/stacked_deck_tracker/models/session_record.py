"""SessionRecord: domain entity for one tracking session of one game.

At most one record per game has is_active=True. The record is created when a
session starts and closed (ended_at, is_active=False) when it stops.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """One tracking session for a game and league.

    Identity: id (UUID).
    """

    id: UUID
    game: str
    league: str
    started_at: datetime
    snapshot_id: str | None = None
    """Price snapshot used for valuations; None when no snapshot was available."""
    ended_at: datetime | None = None
    total_count: int = 0
    """Number of cards (stacked decks opened) recorded in this session."""
    is_active: bool = True

    @property
    def duration_seconds(self) -> float | None:
        """Seconds between start and end. None while the session is running."""
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds()

    def with_total_count(self, total_count: int) -> SessionRecord:
        """Return a copy with total_count set."""
        return replace(self, total_count=total_count)

    def with_incremented(self, delta: int = 1) -> SessionRecord:
        """Return a copy with total_count increased by delta."""
        return replace(self, total_count=self.total_count + delta)

    def with_ended(self, ended_at: datetime | None = None) -> SessionRecord:
        """Return a copy marked inactive with ended_at set."""
        return replace(self, ended_at=ended_at or datetime.now(UTC), is_active=False)

    def with_snapshot(self, snapshot_id: str | None) -> SessionRecord:
        """Return a copy pointing at another price snapshot."""
        return replace(self, snapshot_id=snapshot_id)

    @classmethod
    def create(
        cls,
        game: str,
        league: str,
        *,
        snapshot_id: str | None = None,
        started_at: datetime | None = None,
        id: UUID | None = None,
    ) -> SessionRecord:
        """Create a new active session with zeroed totals."""
        game = game.strip()
        league = league.strip()
        if not game or not league:
            raise ValueError("game and league must be non-empty")
        return cls(
            id=id or uuid4(),
            game=game,
            league=league,
            started_at=started_at or datetime.now(UTC),
            snapshot_id=snapshot_id,
            ended_at=None,
            total_count=0,
            is_active=True,
        )
