"""Client log event parser."""

from stacked_deck_tracker.services.event_parser.event_parser import (
    CARD_DRAWN_MARKER,
    CardEntry,
    CardParseResult,
    parse_card_line,
    parse_cards,
)

__all__ = [
    "CARD_DRAWN_MARKER",
    "CardEntry",
    "CardParseResult",
    "parse_card_line",
    "parse_cards",
]
