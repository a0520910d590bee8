"""SQL session repository (sessions and session_summaries tables)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select

from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.models.session_summary import SessionSummary
from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import SessionDB, SessionSummaryDB, as_utc
from stacked_deck_tracker.persistence.repositories.interfaces.session_repository import (
    ISessionRepository,
)


def _to_model(row: SessionDB) -> SessionRecord:
    return SessionRecord(
        id=UUID(row.id),
        game=row.game,
        league=row.league,
        started_at=as_utc(row.started_at),  # type: ignore[arg-type]
        snapshot_id=row.snapshot_id,
        ended_at=as_utc(row.ended_at),
        total_count=row.total_count,
        is_active=row.is_active,
    )


def _summary_to_model(row: SessionSummaryDB) -> SessionSummary:
    return SessionSummary(
        session_id=UUID(row.session_id),
        game=row.game,
        league=row.league,
        started_at=as_utc(row.started_at),  # type: ignore[arg-type]
        ended_at=as_utc(row.ended_at),  # type: ignore[arg-type]
        duration_minutes=row.duration_minutes,
        total_decks_opened=row.total_decks_opened,
        total_exchange_value=row.total_exchange_value,
        total_stash_value=row.total_stash_value,
        total_exchange_net_profit=row.total_exchange_net_profit,
        total_stash_net_profit=row.total_stash_net_profit,
        exchange_chaos_to_divine=row.exchange_chaos_to_divine,
        stash_chaos_to_divine=row.stash_chaos_to_divine,
        stacked_deck_chaos_cost=row.stacked_deck_chaos_cost,
    )


class SqlSessionRepository(ISessionRepository):
    """ISessionRepository backed by SQLAlchemy."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, session_id: UUID) -> SessionRecord | None:
        """Return the session by id, or None if missing."""
        async with self._db.session() as session:
            row = await session.get(SessionDB, str(session_id))
            return _to_model(row) if row is not None else None

    async def save(self, record: SessionRecord) -> None:
        """Insert or update a session (by id)."""
        async with self._db.session() as session:
            row = await session.get(SessionDB, str(record.id))
            if row is None:
                row = SessionDB(id=str(record.id))
                session.add(row)
            row.game = record.game
            row.league = record.league
            row.snapshot_id = record.snapshot_id
            row.started_at = record.started_at
            row.ended_at = record.ended_at
            row.total_count = record.total_count
            row.is_active = record.is_active

    async def get_active_for_game(self, game: str) -> SessionRecord | None:
        """Return the active session for the game, or None."""
        async with self._db.session() as session:
            result = await session.execute(
                select(SessionDB)
                .where(SessionDB.game == game.strip(), SessionDB.is_active.is_(True))
                .order_by(SessionDB.started_at.desc())
                .limit(1)
            )
            row = result.scalar_one_or_none()
            return _to_model(row) if row is not None else None

    async def list_by_game(self, game: str) -> list[SessionRecord]:
        """Return all sessions for the game, newest first."""
        async with self._db.session() as session:
            result = await session.execute(
                select(SessionDB)
                .where(SessionDB.game == game.strip())
                .order_by(SessionDB.started_at.desc())
            )
            return [_to_model(row) for row in result.scalars()]

    async def deactivate_all(self, game: str, ended_at: datetime) -> int:
        """Close every active session of the game."""
        async with self._db.session() as session:
            result = await session.execute(
                select(SessionDB).where(
                    SessionDB.game == game.strip(), SessionDB.is_active.is_(True)
                )
            )
            rows = list(result.scalars())
            for row in rows:
                row.is_active = False
                if row.ended_at is None:
                    row.ended_at = ended_at
            return len(rows)

    async def save_summary(self, summary: SessionSummary) -> None:
        """Insert the summary of a finished session."""
        async with self._db.session() as session:
            session.add(
                SessionSummaryDB(
                    session_id=str(summary.session_id),
                    game=summary.game,
                    league=summary.league,
                    started_at=summary.started_at,
                    ended_at=summary.ended_at,
                    duration_minutes=summary.duration_minutes,
                    total_decks_opened=summary.total_decks_opened,
                    total_exchange_value=summary.total_exchange_value,
                    total_stash_value=summary.total_stash_value,
                    total_exchange_net_profit=summary.total_exchange_net_profit,
                    total_stash_net_profit=summary.total_stash_net_profit,
                    exchange_chaos_to_divine=summary.exchange_chaos_to_divine,
                    stash_chaos_to_divine=summary.stash_chaos_to_divine,
                    stacked_deck_chaos_cost=summary.stacked_deck_chaos_cost,
                )
            )

    async def get_summary(self, session_id: UUID) -> SessionSummary | None:
        """Return the summary of a finished session, or None."""
        async with self._db.session() as session:
            row = await session.get(SessionSummaryDB, str(session_id))
            return _summary_to_model(row) if row is not None else None
