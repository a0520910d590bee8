"""SQL session card repository (session_cards table)."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select

from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import SessionCardDB, as_utc
from stacked_deck_tracker.persistence.repositories.interfaces.session_card_repository import (
    ISessionCardRepository,
)


def _to_model(row: SessionCardDB) -> CardTally:
    return CardTally(
        session_id=UUID(row.session_id),
        card_name=row.card_name,
        count=row.count,
        first_seen_at=as_utc(row.first_seen_at),  # type: ignore[arg-type]
        last_seen_at=as_utc(row.last_seen_at),  # type: ignore[arg-type]
        hide_price_exchange=row.hide_price_exchange,
        hide_price_stash=row.hide_price_stash,
    )


def _select_one(session_id: UUID, card_name: str):  # type: ignore[no-untyped-def]
    return select(SessionCardDB).where(
        SessionCardDB.session_id == str(session_id),
        SessionCardDB.card_name == card_name.strip(),
    )


class SqlSessionCardRepository(ISessionCardRepository):
    """ISessionCardRepository backed by SQLAlchemy."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, session_id: UUID, card_name: str) -> CardTally | None:
        """Return the tally, or None."""
        async with self._db.session() as session:
            result = await session.execute(_select_one(session_id, card_name))
            row = result.scalar_one_or_none()
            return _to_model(row) if row is not None else None

    async def save(self, tally: CardTally) -> None:
        """Upsert a tally."""
        async with self._db.session() as session:
            result = await session.execute(_select_one(tally.session_id, tally.card_name))
            row = result.scalar_one_or_none()
            if row is None:
                row = SessionCardDB(session_id=str(tally.session_id), card_name=tally.card_name)
                session.add(row)
            row.count = tally.count
            row.first_seen_at = tally.first_seen_at
            row.last_seen_at = tally.last_seen_at
            row.hide_price_exchange = tally.hide_price_exchange
            row.hide_price_stash = tally.hide_price_stash

    async def increment(
        self,
        session_id: UUID,
        card_name: str,
        seen_at: datetime | None = None,
    ) -> CardTally:
        """Create-or-increment in a single transaction."""
        seen_at = seen_at or datetime.now(UTC)
        async with self._db.session() as session:
            result = await session.execute(_select_one(session_id, card_name))
            row = result.scalar_one_or_none()
            if row is None:
                row = SessionCardDB(
                    session_id=str(session_id),
                    card_name=card_name.strip(),
                    count=1,
                    first_seen_at=seen_at,
                    last_seen_at=seen_at,
                    hide_price_exchange=False,
                    hide_price_stash=False,
                )
                session.add(row)
            else:
                row.count = row.count + 1
                row.last_seen_at = seen_at
            await session.flush()
            return _to_model(row)

    async def list_by_session(self, session_id: UUID) -> list[CardTally]:
        """Return all tallies of the session, ordered by card name."""
        async with self._db.session() as session:
            result = await session.execute(
                select(SessionCardDB)
                .where(SessionCardDB.session_id == str(session_id))
                .order_by(SessionCardDB.card_name)
            )
            return [_to_model(row) for row in result.scalars()]

    async def total_count(self, session_id: UUID) -> int:
        """Sum of counts over the session's tallies."""
        async with self._db.session() as session:
            result = await session.execute(
                select(func.coalesce(func.sum(SessionCardDB.count), 0)).where(
                    SessionCardDB.session_id == str(session_id)
                )
            )
            return int(result.scalar_one())
