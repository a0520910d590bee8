"""Application event bus (bubus). Built once by the DI container."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]


def build_event_bus(name: str = "StackedDeckTracker", max_history_size: int = 100) -> EventBus:
    """Return a new event bus without a write-ahead log."""
    return EventBus(
        name=name,
        max_history_size=max_history_size,
        wal_path=None,
    )
