"""SQL (SQLAlchemy async) repository implementations."""

from stacked_deck_tracker.persistence.repositories.sql.card_stat_repository import (
    SqlCardStatRepository,
)
from stacked_deck_tracker.persistence.repositories.sql.processed_id_repository import (
    SqlProcessedIdRepository,
)
from stacked_deck_tracker.persistence.repositories.sql.rarity_repository import (
    SqlRarityRepository,
)
from stacked_deck_tracker.persistence.repositories.sql.session_card_repository import (
    SqlSessionCardRepository,
)
from stacked_deck_tracker.persistence.repositories.sql.session_repository import (
    SqlSessionRepository,
)

__all__ = [
    "SqlCardStatRepository",
    "SqlProcessedIdRepository",
    "SqlRarityRepository",
    "SqlSessionCardRepository",
    "SqlSessionRepository",
]
