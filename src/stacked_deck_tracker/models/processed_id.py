"""ProcessedId: domain entity for persistent card event deduplication.

Identity is (game, scope, processed_id). Used to avoid re-counting card drops
when the same tail of the client log is read again, including after a restart.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum


class DedupScope(str, Enum):
    """Scope of a processed id."""

    SESSION = "session"
    """Ids accepted during the running session; cleared on session start/stop."""
    GLOBAL = "global"
    """Ids accepted at any time; persisted and reloaded on restart."""


@dataclass(frozen=True, slots=True)
class ProcessedId:
    """Record that a card instance id has already been counted.

    Identity: (game, scope, processed_id). discovered_at supports ordering and pruning.
    """

    game: str
    scope: DedupScope
    processed_id: str
    """Instance id taken from the client log line (third column)."""
    card_name: str | None
    """Card the id belonged to, kept for recent-drop lookups."""
    discovered_at: datetime
    """When the id was first accepted."""

    @classmethod
    def create(
        cls,
        game: str,
        processed_id: str,
        *,
        scope: DedupScope = DedupScope.GLOBAL,
        card_name: str | None = None,
        discovered_at: datetime | None = None,
    ) -> ProcessedId:
        """Create a new ProcessedId record."""
        game = game.strip()
        processed_id = processed_id.strip()
        if not game or not processed_id:
            raise ValueError("game and processed_id must be non-empty")
        return cls(
            game=game,
            scope=scope,
            processed_id=processed_id,
            card_name=card_name,
            discovered_at=discovered_at or datetime.now(UTC),
        )
