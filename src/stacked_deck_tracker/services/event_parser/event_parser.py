"""Card event parser: client log text -> unique card drops grouped by card name."""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass, field

from stacked_deck_tracker.models.card_event import CardEvent

CARD_DRAWN_MARKER = "Card drawn from the deck: <divination>"
_CARD_NAME_RE = re.compile(r"\{([^}]+)\}")
# "<date> <time> <instance id> ..."
_INSTANCE_ID_INDEX = 2


@dataclass
class CardEntry:
    """Drops of one card in a parsed block."""

    count: int = 0
    processed_ids: list[str] = field(default_factory=list)
    """Instance ids in first-seen order."""


@dataclass
class CardParseResult:
    """Result of parse_cards."""

    cards: dict[str, CardEntry] = field(default_factory=dict)
    total_count: int = 0
    drops: list[tuple[str, str]] = field(default_factory=list)
    """(card_name, instance_id) in log order."""

    def events(self, game: str) -> list[CardEvent]:
        """Flatten to CardEvents in log order."""
        return [
            CardEvent(game=game, card_name=name, instance_id=instance_id)
            for name, instance_id in self.drops
        ]


def parse_card_line(line: str) -> tuple[str, str] | None:
    """Return (card_name, instance_id) for a card drawn line, or None."""
    if CARD_DRAWN_MARKER not in line:
        return None
    match = _CARD_NAME_RE.search(line)
    if match is None:
        return None
    parts = line.split(" ")
    if len(parts) <= _INSTANCE_ID_INDEX:
        return None
    card_name = match.group(1).strip()
    instance_id = parts[_INSTANCE_ID_INDEX].strip()
    if not card_name or not instance_id:
        return None
    return card_name, instance_id


def parse_cards(text: str, previously_processed_ids: Collection[str] = ()) -> CardParseResult:
    """Extract card drops from text, skipping ids already processed.

    An id repeated inside text counts once. Lines that are not card drops,
    or lack a card name or instance id, are ignored.
    """
    result = CardParseResult()
    seen: set[str] = set()
    for line in text.split("\n"):
        parsed = parse_card_line(line)
        if parsed is None:
            continue
        card_name, instance_id = parsed
        if instance_id in seen or instance_id in previously_processed_ids:
            continue
        seen.add(instance_id)
        entry = result.cards.setdefault(card_name, CardEntry())
        entry.count += 1
        entry.processed_ids.append(instance_id)
        result.drops.append((card_name, instance_id))
        result.total_count += 1
    return result
