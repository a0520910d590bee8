# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, sql)."""

from stacked_deck_tracker.persistence.repositories.in_memory import (
    InMemoryCardStatRepository,
    InMemoryProcessedIdRepository,
    InMemoryRarityRepository,
    InMemorySessionCardRepository,
    InMemorySessionRepository,
)
from stacked_deck_tracker.persistence.repositories.interfaces import (
    ICardStatRepository,
    IProcessedIdRepository,
    IRarityRepository,
    ISessionCardRepository,
    ISessionRepository,
)
from stacked_deck_tracker.persistence.repositories.sql import (
    SqlCardStatRepository,
    SqlProcessedIdRepository,
    SqlRarityRepository,
    SqlSessionCardRepository,
    SqlSessionRepository,
)

__all__ = [
    "ICardStatRepository",
    "IProcessedIdRepository",
    "IRarityRepository",
    "ISessionCardRepository",
    "ISessionRepository",
    "InMemoryCardStatRepository",
    "InMemoryProcessedIdRepository",
    "InMemoryRarityRepository",
    "InMemorySessionCardRepository",
    "InMemorySessionRepository",
    "SqlCardStatRepository",
    "SqlProcessedIdRepository",
    "SqlRarityRepository",
    "SqlSessionCardRepository",
    "SqlSessionRepository",
]
