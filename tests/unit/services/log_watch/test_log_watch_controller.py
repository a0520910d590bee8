# -*- coding: utf-8 -*-
"""Unit tests for LogWatchController."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from uuid import UUID

import pytest

from stacked_deck_tracker.clients.price_provider import InMemoryPriceSnapshotProvider
from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.models.processed_id import DedupScope
from stacked_deck_tracker.persistence.repositories.in_memory import (
    InMemoryCardStatRepository,
    InMemoryProcessedIdRepository,
    InMemorySessionCardRepository,
    InMemorySessionRepository,
)
from stacked_deck_tracker.services.dedup import DedupStore
from stacked_deck_tracker.services.log_watch import LogWatchController
from stacked_deck_tracker.services.session import SessionAggregator
from stacked_deck_tracker.services.tail_reader import TailReader


class _FlakyTailReader(TailReader):
    """Fails the first `failures` reads, then reads normally."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.calls = 0

    async def read(self, path: str, max_lines: int) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise PermissionError("file locked by the game client")
        return await super().read(path, max_lines)


class _SlowTailReader(TailReader):
    """Blocks reads until released."""

    def __init__(self) -> None:
        super().__init__()
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def read(self, path: str, max_lines: int) -> str:
        self.started.set()
        await self.release.wait()
        return await super().read(path, max_lines)


class _SlowSessionCardRepository(InMemorySessionCardRepository):
    """Holds every increment until released."""

    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def increment(self, session_id: UUID, card_name: str, seen_at: datetime | None = None) -> CardTally:
        self.started.set()
        await self.release.wait()
        return await super().increment(session_id, card_name, seen_at)


async def _wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout)


def _append(path: Path, *lines: str) -> None:
    with path.open("a", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


@pytest.fixture
def controller(dedup_store: DedupStore, aggregator: SessionAggregator) -> LogWatchController:
    return LogWatchController(
        tail_reader=TailReader(),
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=0.01,
        tail_lines=10,
    )


async def test_missing_file_is_not_watched(controller: LogWatchController, tmp_path: Path, game: str) -> None:
    watching = await controller.set_target(str(tmp_path / "nope.txt"), game)

    assert watching is False
    assert controller.target is None
    assert not controller.is_watching


async def test_tick_without_target_is_skipped(controller: LogWatchController) -> None:
    result = await controller.tick()

    assert result.skipped
    assert result.reason == "no_target"


async def test_tick_without_active_session_is_skipped(
    controller: LogWatchController,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
) -> None:
    _append(log_file, card_line("A", "1"))
    await controller.set_target(str(log_file), game)
    result = await controller.tick()
    await controller.stop()

    assert result.skipped
    assert result.reason == "no_active_session"


async def test_tick_records_new_lines_once(
    dedup_store: DedupStore,
    aggregator: SessionAggregator,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    controller = LogWatchController(
        tail_reader=TailReader(),
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=60,
    )
    await aggregator.start_session(game, league)
    _append(log_file, card_line("A", "1"), card_line("B", "2"))
    await controller.set_target(str(log_file), game)

    first = await controller.tick()
    second = await controller.tick()
    _append(log_file, card_line("A", "3"))
    third = await controller.tick()
    await controller.stop()

    assert first.accepted == 2
    assert second.accepted == 0
    assert third.accepted == 1
    data = await aggregator.get_current_session(game)
    assert data.total_count == 3
    assert {c.name: c.count for c in data.cards} == {"A": 2, "B": 1}


async def test_productive_tick_flushes_dedup(
    controller: LogWatchController,
    dedup_store: DedupStore,
    processed_id_repo: InMemoryProcessedIdRepository,
    aggregator: SessionAggregator,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    await aggregator.start_session(game, league)
    _append(log_file, card_line("A", "1"))
    await controller.set_target(str(log_file), game)

    await _wait_for(
        lambda: not dedup_store.is_new(game, DedupScope.GLOBAL, "1") and dedup_store.pending_count(game) == 0
    )
    await controller.stop()

    assert await processed_id_repo.contains(game, DedupScope.GLOBAL, "1")


async def test_poll_loop_picks_up_appended_lines(
    controller: LogWatchController,
    aggregator: SessionAggregator,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    await aggregator.start_session(game, league)
    await controller.set_target(str(log_file), game)

    _append(log_file, card_line("The Doctor", "100"))

    async def _count() -> int:
        return (await aggregator.get_current_session(game)).total_count

    for _ in range(200):
        if await _count() == 1:
            break
        await asyncio.sleep(0.01)
    await controller.stop()

    assert await _count() == 1


async def test_failed_tick_keeps_polling(
    dedup_store: DedupStore,
    aggregator: SessionAggregator,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    reader = _FlakyTailReader(failures=2)
    controller = LogWatchController(
        tail_reader=reader,
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=0.01,
    )
    await aggregator.start_session(game, league)
    _append(log_file, card_line("A", "1"))

    await controller.set_target(str(log_file), game)
    await _wait_for(lambda: not dedup_store.is_new(game, DedupScope.GLOBAL, "1"))
    await controller.stop()

    assert reader.calls >= 3
    assert (await aggregator.get_current_session(game)).total_count == 1


async def test_tick_propagates_errors(
    dedup_store: DedupStore,
    aggregator: SessionAggregator,
    log_file: Path,
    game: str,
    league: str,
) -> None:
    controller = LogWatchController(
        tail_reader=_FlakyTailReader(failures=10),
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=60,
    )
    await aggregator.start_session(game, league)
    await controller.set_target(str(log_file), game)

    with pytest.raises(PermissionError):
        await controller.tick()
    await controller.stop()


async def test_set_target_replaces_previous_watch(
    controller: LogWatchController,
    tmp_path: Path,
    log_file: Path,
) -> None:
    other = tmp_path / "poe2_Client.txt"
    other.write_text("", encoding="utf-8")

    assert await controller.set_target(str(log_file), "poe1")
    first_task = controller._task
    assert await controller.set_target(str(other), "poe2")

    assert first_task is not None and first_task.done()
    assert controller.target is not None
    assert controller.target.game == "poe2"
    assert controller.is_watching
    await controller.stop()
    assert not controller.is_watching
    assert controller.target is None


async def test_stop_is_idempotent(controller: LogWatchController) -> None:
    await controller.stop()
    await controller.stop()

    assert not controller.is_watching


async def test_shutdown_flushes_pending_ids(
    controller: LogWatchController,
    dedup_store: DedupStore,
    processed_id_repo: InMemoryProcessedIdRepository,
    game: str,
) -> None:
    dedup_store.mark_processed(game, DedupScope.GLOBAL, "77", "A")

    async with controller:
        pass

    assert dedup_store.pending_count() == 0
    assert await processed_id_repo.contains(game, DedupScope.GLOBAL, "77")


async def test_concurrent_tick_is_skipped_when_busy(
    dedup_store: DedupStore,
    aggregator: SessionAggregator,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    reader = _SlowTailReader()
    controller = LogWatchController(
        tail_reader=reader,
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=60,
    )
    await aggregator.start_session(game, league)
    _append(log_file, card_line("A", "1"))
    await controller.set_target(str(log_file), game)
    await reader.started.wait()

    busy = await controller.tick()
    reader.release.set()
    await controller.stop()

    assert busy.skipped
    assert busy.reason == "busy"


async def test_stop_waits_for_in_flight_write(
    dedup_store: DedupStore,
    processed_id_repo: InMemoryProcessedIdRepository,
    price_provider: InMemoryPriceSnapshotProvider,
    log_file: Path,
    card_line: Callable[..., str],
    game: str,
    league: str,
) -> None:
    cards = _SlowSessionCardRepository()
    aggregator = SessionAggregator(
        session_repository=InMemorySessionRepository(),
        session_card_repository=cards,
        card_stat_repository=InMemoryCardStatRepository(),
        dedup_store=dedup_store,
        price_provider=price_provider,
    )
    controller = LogWatchController(
        tail_reader=TailReader(),
        dedup_store=dedup_store,
        session_aggregator=aggregator,
        poll_interval_seconds=0.01,
    )
    session = await aggregator.start_session(game, league)
    _append(log_file, card_line("The Doctor", "1"))
    await controller.set_target(str(log_file), game)
    await asyncio.wait_for(cards.started.wait(), 2.0)

    stopping = asyncio.create_task(controller.stop())
    await asyncio.sleep(0.05)
    assert not stopping.done()
    cards.release.set()
    await asyncio.wait_for(stopping, 2.0)
    result = await aggregator.stop_session(game)

    assert not controller.is_watching
    assert result.total_count == 1
    assert [(t.card_name, t.count) for t in await cards.list_by_session(session.id)] == [("The Doctor", 1)]
    assert await processed_id_repo.contains(game, DedupScope.GLOBAL, "1")
