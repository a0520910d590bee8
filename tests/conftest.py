# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit and integration tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from stacked_deck_tracker.clients.price_provider import InMemoryPriceSnapshotProvider
from stacked_deck_tracker.models.price_snapshot import (
    CardPrice,
    Confidence,
    PriceSnapshot,
    SourcePrices,
)
from stacked_deck_tracker.persistence.db import Database
from stacked_deck_tracker.persistence.repositories.in_memory import (
    InMemoryCardStatRepository,
    InMemoryProcessedIdRepository,
    InMemoryRarityRepository,
    InMemorySessionCardRepository,
    InMemorySessionRepository,
)
from stacked_deck_tracker.services.dedup import DedupStore
from stacked_deck_tracker.services.rarity import RarityService
from stacked_deck_tracker.services.session import SessionAggregator


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)


@pytest.fixture
def game() -> str:
    """Default game used by tests."""
    return "poe1"


@pytest.fixture
def league() -> str:
    """Default league used by tests."""
    return "Settlers"


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def card_line() -> Callable[..., str]:
    """Build a client log line for a drawn card: card_line("The Doctor", "100000001")."""

    def _build(card_name: str, instance_id: str, *, time: str = "02:07:01") -> str:
        return (
            f"2025/12/01 {time} {instance_id} cff945bb [INFO Client 2588] : "
            f"Card drawn from the deck: <divination>{{{card_name}}}"
        )

    return _build


@pytest.fixture
def snapshot_factory(league: str) -> Callable[..., PriceSnapshot]:
    """Build PriceSnapshot from {card: chaos} maps; divine values derive from the ratio."""

    def _build(
        exchange: dict[str, float] | None = None,
        stash: dict[str, float] | None = None,
        *,
        exchange_ratio: float = 200.0,
        stash_ratio: float = 200.0,
        deck_cost: float = 0.0,
        confidence: dict[str, Confidence] | None = None,
        snapshot_league: str | None = None,
    ) -> PriceSnapshot:
        confidence = confidence or {}

        def _table(prices: dict[str, float] | None, ratio: float) -> SourcePrices:
            return SourcePrices(
                chaos_to_divine_ratio=ratio,
                card_prices={
                    name: CardPrice(
                        chaos_value=chaos,
                        divine_value=chaos / ratio if ratio else 0.0,
                        confidence=confidence.get(name, Confidence.HIGH),
                    )
                    for name, chaos in (prices or {}).items()
                },
            )

        return PriceSnapshot.create(
            snapshot_league or league,
            exchange=_table(exchange, exchange_ratio),
            stash=_table(stash, stash_ratio),
            stacked_deck_chaos_cost=deck_cost,
        )

    return _build


@pytest.fixture
def processed_id_repo() -> InMemoryProcessedIdRepository:
    """Fresh in-memory processed id repository per test."""
    return InMemoryProcessedIdRepository()


@pytest.fixture
def session_repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def session_card_repo() -> InMemorySessionCardRepository:
    return InMemorySessionCardRepository()


@pytest.fixture
def card_stat_repo() -> InMemoryCardStatRepository:
    return InMemoryCardStatRepository()


@pytest.fixture
def rarity_repo() -> InMemoryRarityRepository:
    return InMemoryRarityRepository()


@pytest.fixture
def dedup_store(processed_id_repo: InMemoryProcessedIdRepository) -> DedupStore:
    return DedupStore(processed_id_repository=processed_id_repo)


@pytest.fixture
def rarity_service(rarity_repo: InMemoryRarityRepository) -> RarityService:
    return RarityService(rarity_repository=rarity_repo)


@pytest.fixture
def price_provider() -> InMemoryPriceSnapshotProvider:
    return InMemoryPriceSnapshotProvider()


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def aggregator(
    session_repo: InMemorySessionRepository,
    session_card_repo: InMemorySessionCardRepository,
    card_stat_repo: InMemoryCardStatRepository,
    dedup_store: DedupStore,
    price_provider: InMemoryPriceSnapshotProvider,
    rarity_service: RarityService,
    fake_event_bus: FakeEventBus,
) -> SessionAggregator:
    """SessionAggregator wired to in-memory repositories and a recording event bus."""
    return SessionAggregator(
        session_repository=session_repo,
        session_card_repository=session_card_repo,
        card_stat_repository=card_stat_repo,
        dedup_store=dedup_store,
        price_provider=price_provider,
        rarity_service=rarity_service,
        event_bus=fake_event_bus,
        recent_drops_size=10,
    )


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="StackedDeckTrackerTests",
        max_history_size=200,
        wal_path=None,
    )


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    """SQLite database in a temp file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}")
    await db.init_db()
    yield db
    await db.dispose()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Empty client log file."""
    path = tmp_path / "Client.txt"
    path.write_text("", encoding="utf-8")
    return path
