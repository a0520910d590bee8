"""SQL card stat repository (card_stats table)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from stacked_deck_tracker.models.card_stat import CardStat
from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import CardStatDB, as_utc
from stacked_deck_tracker.persistence.repositories.interfaces.card_stat_repository import (
    ICardStatRepository,
)


def _to_model(row: CardStatDB) -> CardStat:
    return CardStat(
        game=row.game,
        scope=row.scope,
        card_name=row.card_name,
        count=row.count,
        last_updated=as_utc(row.last_updated),  # type: ignore[arg-type]
    )


class SqlCardStatRepository(ICardStatRepository):
    """ICardStatRepository backed by SQLAlchemy."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def increment(self, game: str, scope: str, card_name: str, at: datetime) -> CardStat:
        """Add one to the count (creating it at 1) in a single transaction."""
        async with self._db.session() as session:
            result = await session.execute(
                select(CardStatDB).where(
                    CardStatDB.game == game,
                    CardStatDB.scope == scope,
                    CardStatDB.card_name == card_name,
                )
            )
            row = result.scalar_one_or_none()
            if row is None:
                row = CardStatDB(game=game, scope=scope, card_name=card_name, count=1, last_updated=at)
                session.add(row)
            else:
                row.count = row.count + 1
                row.last_updated = at
            await session.flush()
            return _to_model(row)

    async def get(self, game: str, scope: str, card_name: str) -> CardStat | None:
        """Return the stat, or None."""
        async with self._db.session() as session:
            result = await session.execute(
                select(CardStatDB).where(
                    CardStatDB.game == game,
                    CardStatDB.scope == scope,
                    CardStatDB.card_name == card_name,
                )
            )
            row = result.scalar_one_or_none()
            return _to_model(row) if row is not None else None

    async def list_by_scope(self, game: str, scope: str) -> list[CardStat]:
        """Return every stat of (game, scope), ordered by card name."""
        async with self._db.session() as session:
            result = await session.execute(
                select(CardStatDB)
                .where(CardStatDB.game == game, CardStatDB.scope == scope)
                .order_by(CardStatDB.card_name)
            )
            return [_to_model(row) for row in result.scalars()]
