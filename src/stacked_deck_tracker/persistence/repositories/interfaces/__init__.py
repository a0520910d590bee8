# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and sql/."""

from stacked_deck_tracker.persistence.repositories.interfaces.card_stat_repository import (
    ICardStatRepository,
)
from stacked_deck_tracker.persistence.repositories.interfaces.processed_id_repository import (
    IProcessedIdRepository,
)
from stacked_deck_tracker.persistence.repositories.interfaces.rarity_repository import (
    IRarityRepository,
)
from stacked_deck_tracker.persistence.repositories.interfaces.session_card_repository import (
    ISessionCardRepository,
)
from stacked_deck_tracker.persistence.repositories.interfaces.session_repository import (
    ISessionRepository,
)

__all__ = [
    "ICardStatRepository",
    "IProcessedIdRepository",
    "IRarityRepository",
    "ISessionCardRepository",
    "ISessionRepository",
]
