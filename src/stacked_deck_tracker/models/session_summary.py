"""SessionSummary: immutable totals written once when a session stops."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Self-contained summary of a finished session for fast history queries."""

    session_id: UUID
    game: str
    league: str
    started_at: datetime
    ended_at: datetime
    duration_minutes: int
    total_decks_opened: int
    total_exchange_value: float
    total_stash_value: float
    total_exchange_net_profit: float
    total_stash_net_profit: float
    exchange_chaos_to_divine: float
    stash_chaos_to_divine: float
    stacked_deck_chaos_cost: float
