"""SQL processed id repository (SQLAlchemy async)."""

from __future__ import annotations

from sqlalchemy import delete, select

from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId
from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import ProcessedIdDB, as_utc
from stacked_deck_tracker.persistence.repositories.interfaces.processed_id_repository import (
    IProcessedIdRepository,
)


def _to_model(row: ProcessedIdDB) -> ProcessedId:
    return ProcessedId(
        game=row.game,
        scope=DedupScope(row.scope),
        processed_id=row.processed_id,
        card_name=row.card_name,
        discovered_at=as_utc(row.created_at),  # type: ignore[arg-type]
    )


class SqlProcessedIdRepository(IProcessedIdRepository):
    """IProcessedIdRepository backed by the processed_ids table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_by_game(self, game: str, scope: DedupScope) -> list[ProcessedId]:
        """Return all ids for (game, scope), oldest first."""
        async with self._db.session() as session:
            result = await session.execute(
                select(ProcessedIdDB)
                .where(ProcessedIdDB.game == game.strip(), ProcessedIdDB.scope == scope.value)
                .order_by(ProcessedIdDB.created_at, ProcessedIdDB.id)
            )
            return [_to_model(row) for row in result.scalars()]

    async def add_batch(self, processed_ids: list[ProcessedId]) -> None:
        """Insert ids not already stored, in one transaction."""
        if not processed_ids:
            return
        async with self._db.session() as session:
            seen: set[tuple[str, str, str]] = set()
            for p in processed_ids:
                key = (p.game, p.scope.value, p.processed_id)
                if key in seen:
                    continue
                seen.add(key)
                existing = await session.execute(
                    select(ProcessedIdDB.id).where(
                        ProcessedIdDB.game == p.game,
                        ProcessedIdDB.scope == p.scope.value,
                        ProcessedIdDB.processed_id == p.processed_id,
                    )
                )
                if existing.scalar_one_or_none() is not None:
                    continue
                session.add(
                    ProcessedIdDB(
                        game=p.game,
                        scope=p.scope.value,
                        processed_id=p.processed_id,
                        card_name=p.card_name,
                        created_at=p.discovered_at,
                    )
                )

    async def contains(self, game: str, scope: DedupScope, processed_id: str) -> bool:
        """Return True if the id is stored for (game, scope)."""
        async with self._db.session() as session:
            result = await session.execute(
                select(ProcessedIdDB.id).where(
                    ProcessedIdDB.game == game.strip(),
                    ProcessedIdDB.scope == scope.value,
                    ProcessedIdDB.processed_id == processed_id.strip(),
                )
            )
            return result.scalar_one_or_none() is not None

    async def clear(self, game: str, scope: DedupScope) -> int:
        """Delete every id for (game, scope)."""
        async with self._db.session() as session:
            result = await session.execute(
                delete(ProcessedIdDB).where(
                    ProcessedIdDB.game == game.strip(),
                    ProcessedIdDB.scope == scope.value,
                )
            )
            return int(result.rowcount or 0)
