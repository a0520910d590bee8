"""Tail reader service."""

from stacked_deck_tracker.services.tail_reader.tail_reader import (
    CHUNK_SIZE,
    TailReader,
    read_last_lines,
)

__all__ = ["CHUNK_SIZE", "TailReader", "read_last_lines"]
