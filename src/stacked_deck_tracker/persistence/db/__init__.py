"""Database engine, session management and ORM models."""

from stacked_deck_tracker.persistence.db.database import Database
from stacked_deck_tracker.persistence.db.models import Base

__all__ = ["Base", "Database"]
