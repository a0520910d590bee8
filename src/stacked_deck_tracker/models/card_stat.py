"""CardStat: cascaded card counts outside a single session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ALL_TIME_SCOPE = "all-time"
"""Scope name for lifetime counts; league counts use the league name as scope."""


@dataclass(frozen=True, slots=True)
class CardStat:
    """Count of a card for a game in a scope (all-time or a league).

    Identity: (game, scope, card_name).
    """

    game: str
    scope: str
    card_name: str
    count: int
    last_updated: datetime
