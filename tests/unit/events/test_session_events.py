# -*- coding: utf-8 -*-
"""Session events delivered through a real event bus."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

from stacked_deck_tracker.clients.price_provider import InMemoryPriceSnapshotProvider
from stacked_deck_tracker.events.session_events import (
    SessionDataUpdatedEvent,
    SessionStateChangedEvent,
)
from stacked_deck_tracker.persistence.repositories.in_memory import (
    InMemoryCardStatRepository,
    InMemorySessionCardRepository,
    InMemorySessionRepository,
)
from stacked_deck_tracker.services.dedup import DedupStore
from stacked_deck_tracker.services.session import SessionAggregator


async def test_subscribers_receive_session_events(
    event_bus: EventBus,
    dedup_store: DedupStore,
    game: str,
    league: str,
) -> None:
    received: list[object] = []

    async def _on_state(event: SessionStateChangedEvent) -> None:
        received.append(("state", event.is_active))

    async def _on_data(event: SessionDataUpdatedEvent) -> None:
        received.append(("data", event.total_count))

    event_bus.on(SessionStateChangedEvent, _on_state)
    event_bus.on(SessionDataUpdatedEvent, _on_data)
    aggregator = SessionAggregator(
        session_repository=InMemorySessionRepository(),
        session_card_repository=InMemorySessionCardRepository(),
        card_stat_repository=InMemoryCardStatRepository(),
        dedup_store=dedup_store,
        price_provider=InMemoryPriceSnapshotProvider(),
        event_bus=event_bus,
    )

    await aggregator.start_session(game, league)
    await aggregator.record_event(game, "A", "1")
    await aggregator.stop_session(game)
    await event_bus.wait_until_idle()
    await event_bus.stop()

    assert received == [("state", True), ("data", 1), ("state", False)]
