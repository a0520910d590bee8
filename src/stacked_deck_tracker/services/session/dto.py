"""Read models returned by SessionAggregator."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PriceView:
    """Price of a card in one source, as shown for the session."""

    chaos_value: float = 0.0
    divine_value: float = 0.0
    total_value: float = 0.0
    """chaos_value * count."""
    hide_price: bool = False


@dataclass(frozen=True)
class CardEntryView:
    """One card of the current session."""

    name: str
    count: int
    rarity: int = 0
    exchange_price: PriceView | None = None
    """None when the session has no price snapshot."""
    stash_price: PriceView | None = None


@dataclass(frozen=True)
class SourceTotals:
    """Totals of one price source."""

    total_value: float = 0.0
    net_profit: float = 0.0
    chaos_to_divine_ratio: float = 0.0


@dataclass(frozen=True)
class SessionTotals:
    """Session totals for both price sources."""

    exchange: SourceTotals = field(default_factory=SourceTotals)
    stash: SourceTotals = field(default_factory=SourceTotals)
    stacked_deck_chaos_cost: float = 0.0
    total_deck_cost: float = 0.0


@dataclass(frozen=True)
class RecentDrop:
    """A card drop with the valuations it had when it dropped."""

    card_name: str
    instance_id: str
    dropped_at: datetime
    rarity: int = 0
    exchange_chaos_value: float = 0.0
    exchange_divine_value: float = 0.0
    stash_chaos_value: float = 0.0
    stash_divine_value: float = 0.0


@dataclass(frozen=True)
class ActiveSessionInfo:
    session_id: str
    league: str
    started_at: datetime


@dataclass(frozen=True)
class StopSessionResult:
    """Returned by stop_session."""

    total_count: int
    duration_ms: int
    league: str
    game: str


@dataclass(frozen=True)
class CurrentSessionData:
    """Full view of the current session of a game.

    The zero shape (is_active=False, no cards, zero totals) stands for
    "no active session".
    """

    game: str
    is_active: bool = False
    session_id: str | None = None
    league: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    total_count: int = 0
    snapshot_id: str | None = None
    cards: list[CardEntryView] = field(default_factory=list)
    recent_drops: list[RecentDrop] = field(default_factory=list)
    totals: SessionTotals = field(default_factory=SessionTotals)

    @classmethod
    def empty(cls, game: str) -> CurrentSessionData:
        return cls(game=game)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
