"""
SQLAlchemy ORM models for persistent storage.

Tables mirror the frozen dataclass models; repositories in persistence/repositories/sql
convert between the two.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite returns naive datetimes; reattach UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProcessedIdDB(Base):
    """A card instance id that has already been counted."""

    __tablename__ = "processed_ids"
    __table_args__ = (
        UniqueConstraint("game", "scope", "processed_id", name="uq_processed_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game: Mapped[str] = mapped_column(String(16), index=True)
    scope: Mapped[str] = mapped_column(String(16))
    processed_id: Mapped[str] = mapped_column(String(64))
    card_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<ProcessedIdDB(game={self.game}, id={self.processed_id})>"


class SessionDB(Base):
    """One tracking session."""

    __tablename__ = "sessions"
    __table_args__ = (Index("ix_sessions_game_active", "game", "is_active"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    game: Mapped[str] = mapped_column(String(16))
    league: Mapped[str] = mapped_column(String(128))
    snapshot_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_count: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<SessionDB(id={self.id}, game={self.game}, active={self.is_active})>"


class SessionCardDB(Base):
    """Per-card tally within a session."""

    __tablename__ = "session_cards"
    __table_args__ = (UniqueConstraint("session_id", "card_name", name="uq_session_card"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True
    )
    card_name: Mapped[str] = mapped_column(String(255))
    count: Mapped[int] = mapped_column(Integer, default=0)
    first_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    last_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    hide_price_exchange: Mapped[bool] = mapped_column(Boolean, default=False)
    hide_price_stash: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self) -> str:
        return f"<SessionCardDB(card={self.card_name}, count={self.count})>"


class SessionSummaryDB(Base):
    """Summary of a finished session."""

    __tablename__ = "session_summaries"

    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), primary_key=True
    )
    game: Mapped[str] = mapped_column(String(16), index=True)
    league: Mapped[str] = mapped_column(String(128))
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ended_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    duration_minutes: Mapped[int] = mapped_column(Integer)
    total_decks_opened: Mapped[int] = mapped_column(Integer)
    total_exchange_value: Mapped[float] = mapped_column(Float)
    total_stash_value: Mapped[float] = mapped_column(Float)
    total_exchange_net_profit: Mapped[float] = mapped_column(Float)
    total_stash_net_profit: Mapped[float] = mapped_column(Float)
    exchange_chaos_to_divine: Mapped[float] = mapped_column(Float)
    stash_chaos_to_divine: Mapped[float] = mapped_column(Float)
    stacked_deck_chaos_cost: Mapped[float] = mapped_column(Float, default=0.0)


class CardRarityDB(Base):
    """Rarity of a card in a league."""

    __tablename__ = "card_rarities"
    __table_args__ = (
        UniqueConstraint("game", "league", "card_name", name="uq_card_rarity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game: Mapped[str] = mapped_column(String(16))
    league: Mapped[str] = mapped_column(String(128))
    card_name: Mapped[str] = mapped_column(String(255))
    rarity: Mapped[int] = mapped_column(Integer)
    override_rarity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class CardStatDB(Base):
    """Cascaded card count (all-time or per league)."""

    __tablename__ = "card_stats"
    __table_args__ = (UniqueConstraint("game", "scope", "card_name", name="uq_card_stat"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game: Mapped[str] = mapped_column(String(16))
    scope: Mapped[str] = mapped_column(String(128))
    card_name: Mapped[str] = mapped_column(String(255))
    count: Mapped[int] = mapped_column(Integer, default=0)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True))
