"""In-memory repository implementations."""

from stacked_deck_tracker.persistence.repositories.in_memory.card_stat_repository import (
    InMemoryCardStatRepository,
)
from stacked_deck_tracker.persistence.repositories.in_memory.processed_id_repository import (
    InMemoryProcessedIdRepository,
)
from stacked_deck_tracker.persistence.repositories.in_memory.rarity_repository import (
    InMemoryRarityRepository,
)
from stacked_deck_tracker.persistence.repositories.in_memory.session_card_repository import (
    InMemorySessionCardRepository,
)
from stacked_deck_tracker.persistence.repositories.in_memory.session_repository import (
    InMemorySessionRepository,
)

__all__ = [
    "InMemoryCardStatRepository",
    "InMemoryProcessedIdRepository",
    "InMemoryRarityRepository",
    "InMemorySessionCardRepository",
    "InMemorySessionRepository",
]
