"""Processed id deduplication."""

from stacked_deck_tracker.services.dedup.dedup_store import DedupStore

__all__ = ["DedupStore"]
