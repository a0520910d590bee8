"""CardEvent: one card drawn from a stacked deck, as seen in the client log."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardEvent:
    """A single card-acquisition occurrence. Never persisted directly."""

    game: str
    card_name: str
    instance_id: str
