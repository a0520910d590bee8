# -*- coding: utf-8 -*-
"""Unit tests for price snapshot providers and the settings store."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

import pytest

from stacked_deck_tracker.clients import (
    CachedPriceSnapshotProvider,
    InMemoryPriceSnapshotProvider,
    InMemorySettingsStore,
    SettingsKey,
)
from stacked_deck_tracker.clients.settings_store import log_path_key
from stacked_deck_tracker.config import Settings
from stacked_deck_tracker.models.price_snapshot import PriceSnapshot


class _CountingProvider(InMemoryPriceSnapshotProvider):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    async def get_snapshot(self, game: str, league: str) -> Optional[PriceSnapshot]:
        self.calls += 1
        return await super().get_snapshot(game, league)


async def test_in_memory_provider_returns_latest(
    snapshot_factory: Callable[..., PriceSnapshot], game: str, league: str
) -> None:
    provider = InMemoryPriceSnapshotProvider()
    first = snapshot_factory({"A": 1.0})
    second = snapshot_factory({"A": 2.0})

    provider.publish(game, first)
    provider.publish(game, second)

    assert await provider.get_snapshot(game, league) is second
    assert await provider.load_snapshot(first.id) is first
    assert await provider.get_snapshot("poe2", league) is None


async def test_cached_provider_reuses_snapshot(
    snapshot_factory: Callable[..., PriceSnapshot], game: str, league: str
) -> None:
    inner = _CountingProvider()
    inner.publish(game, snapshot_factory({"A": 1.0}))
    cached = CachedPriceSnapshotProvider(inner, ttl_seconds=3600)

    first = await cached.get_snapshot(game, league)
    inner.publish(game, snapshot_factory({"A": 5.0}))
    second = await cached.get_snapshot(game, league)

    assert first is second
    assert inner.calls == 1

    cached.invalidate(game, league)
    third = await cached.get_snapshot(game, league)
    assert third is not first
    assert inner.calls == 2


async def test_cached_provider_does_not_cache_misses(game: str, league: str) -> None:
    inner = _CountingProvider()
    cached = CachedPriceSnapshotProvider(inner)

    assert await cached.get_snapshot(game, league) is None
    assert await cached.get_snapshot(game, league) is None
    assert inner.calls == 2


async def test_cached_provider_load_by_id(
    snapshot_factory: Callable[..., PriceSnapshot], game: str, league: str
) -> None:
    inner = InMemoryPriceSnapshotProvider()
    snapshot = snapshot_factory()
    inner.publish(game, snapshot)
    cached = CachedPriceSnapshotProvider(inner)

    assert await cached.load_snapshot(snapshot.id) is snapshot
    assert await cached.load_snapshot("missing") is None


async def test_settings_store_seeded_from_settings() -> None:
    settings = Settings(game={"selected_game": "poe2", "poe2_log_path": "/games/poe2/logs/Client.txt"})

    store = InMemorySettingsStore.from_settings(settings)

    assert await store.get(SettingsKey.SELECTED_GAME) == "poe2"
    assert await store.get_log_path("poe2") == "/games/poe2/logs/Client.txt"
    assert await store.get_log_path("poe1") is None


def test_log_path_key_rejects_unknown_game() -> None:
    assert log_path_key("poe1") is SettingsKey.POE1_LOG_PATH
    with pytest.raises(ValueError):
        log_path_key("poe3")
