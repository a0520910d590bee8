# -*- coding: utf-8 -*-
"""Unit tests for in-memory repositories."""

from __future__ import annotations

from datetime import datetime, timedelta

from stacked_deck_tracker.models.card_stat import ALL_TIME_SCOPE
from stacked_deck_tracker.models.price_snapshot import PriceSource
from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId
from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.persistence.repositories.in_memory import (
    InMemoryCardStatRepository,
    InMemoryProcessedIdRepository,
    InMemorySessionCardRepository,
    InMemorySessionRepository,
)


async def test_processed_ids_keep_insertion_order(processed_id_repo: InMemoryProcessedIdRepository, game: str) -> None:
    await processed_id_repo.add_batch([ProcessedId.create(game, "b"), ProcessedId.create(game, "a")])
    await processed_id_repo.add_batch([ProcessedId.create(game, "b", card_name="ignored")])

    rows = await processed_id_repo.list_by_game(game, DedupScope.GLOBAL)

    assert [r.processed_id for r in rows] == ["b", "a"]
    assert rows[0].card_name is None


async def test_session_repository_active_and_deactivate(
    session_repo: InMemorySessionRepository, game: str, league: str, now_utc: datetime
) -> None:
    first = SessionRecord.create(game, league, started_at=now_utc - timedelta(hours=1))
    second = SessionRecord.create("poe2", league, started_at=now_utc)
    await session_repo.save(first)
    await session_repo.save(second)

    assert (await session_repo.get_active_for_game(game)) == first
    assert await session_repo.deactivate_all(game, now_utc) == 1
    assert await session_repo.get_active_for_game(game) is None
    assert await session_repo.get_active_for_game("poe2") == second
    stored = await session_repo.get(first.id)
    assert stored is not None and stored.ended_at == now_utc


async def test_session_card_repository_increment_and_total(
    session_card_repo: InMemorySessionCardRepository, now_utc: datetime
) -> None:
    record = SessionRecord.create("poe1", "Settlers")

    await session_card_repo.increment(record.id, "B", now_utc)
    await session_card_repo.increment(record.id, "A", now_utc)
    await session_card_repo.increment(record.id, "A", now_utc + timedelta(seconds=1))

    tallies = await session_card_repo.list_by_session(record.id)
    assert [(t.card_name, t.count) for t in tallies] == [("A", 2), ("B", 1)]
    assert await session_card_repo.total_count(record.id) == 3
    updated = await session_card_repo.set_price_hidden(record.id, "A", PriceSource.EXCHANGE, True)
    assert updated is not None and updated.hide_price_exchange


async def test_card_stat_repository_scopes(card_stat_repo: InMemoryCardStatRepository, game: str, now_utc: datetime) -> None:
    await card_stat_repo.increment(game, ALL_TIME_SCOPE, "B", now_utc)
    await card_stat_repo.increment(game, ALL_TIME_SCOPE, "A", now_utc)
    await card_stat_repo.increment(game, "Settlers", "A", now_utc)

    assert [s.card_name for s in await card_stat_repo.list_by_scope(game, ALL_TIME_SCOPE)] == ["A", "B"]
    assert await card_stat_repo.total_count(game, ALL_TIME_SCOPE) == 2
    assert await card_stat_repo.total_count("poe2", ALL_TIME_SCOPE) == 0
