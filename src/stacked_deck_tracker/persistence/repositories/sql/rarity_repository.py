"""SQL rarity repository (card_rarities table)."""

from __future__ import annotations

from sqlalchemy import select

from stacked_deck_tracker.models.rarity import CardRarity, RarityTier
from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import CardRarityDB, as_utc
from stacked_deck_tracker.persistence.repositories.interfaces.rarity_repository import (
    IRarityRepository,
)


def _to_model(row: CardRarityDB) -> CardRarity:
    return CardRarity(
        game=row.game,
        league=row.league,
        card_name=row.card_name,
        rarity=RarityTier(row.rarity),
        override_rarity=RarityTier(row.override_rarity) if row.override_rarity is not None else None,
        last_updated=as_utc(row.last_updated),
    )


class SqlRarityRepository(IRarityRepository):
    """IRarityRepository backed by SQLAlchemy."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, game: str, league: str, card_name: str) -> CardRarity | None:
        """Return the stored rarity, or None."""
        async with self._db.session() as session:
            result = await session.execute(
                select(CardRarityDB).where(
                    CardRarityDB.game == game,
                    CardRarityDB.league == league,
                    CardRarityDB.card_name == card_name,
                )
            )
            row = result.scalar_one_or_none()
            return _to_model(row) if row is not None else None

    async def save_batch(self, rarities: list[CardRarity]) -> None:
        """Upsert many rarities in one transaction."""
        if not rarities:
            return
        async with self._db.session() as session:
            for r in rarities:
                result = await session.execute(
                    select(CardRarityDB).where(
                        CardRarityDB.game == r.game,
                        CardRarityDB.league == r.league,
                        CardRarityDB.card_name == r.card_name,
                    )
                )
                row = result.scalar_one_or_none()
                if row is None:
                    row = CardRarityDB(game=r.game, league=r.league, card_name=r.card_name)
                    session.add(row)
                row.rarity = int(r.rarity)
                row.override_rarity = int(r.override_rarity) if r.override_rarity is not None else None
                row.last_updated = r.last_updated

    async def list_by_league(self, game: str, league: str) -> list[CardRarity]:
        """Return every stored rarity for (game, league), ordered by card name."""
        async with self._db.session() as session:
            result = await session.execute(
                select(CardRarityDB)
                .where(CardRarityDB.game == game, CardRarityDB.league == league)
                .order_by(CardRarityDB.card_name)
            )
            return [_to_model(row) for row in result.scalars()]
