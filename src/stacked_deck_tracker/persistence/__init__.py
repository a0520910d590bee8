"""Persistence layer (database, repositories)."""

from stacked_deck_tracker.persistence.db import Database
from stacked_deck_tracker.persistence.repositories import (
    ICardStatRepository,
    IProcessedIdRepository,
    IRarityRepository,
    ISessionCardRepository,
    ISessionRepository,
)

__all__ = [
    "Database",
    "ICardStatRepository",
    "IProcessedIdRepository",
    "IRarityRepository",
    "ISessionCardRepository",
    "ISessionRepository",
]
