# -*- coding: utf-8 -*-
"""Price snapshot providers.

The market price fetch lives outside this package; the engine only needs
something that hands out immutable PriceSnapshots for (game, league).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import structlog
from cachetools import TTLCache

from stacked_deck_tracker.models.price_snapshot import PriceSnapshot


class IPriceSnapshotProvider(ABC):
    """Source of price snapshots."""

    @abstractmethod
    async def get_snapshot(self, game: str, league: str) -> Optional[PriceSnapshot]:
        """Return the snapshot to use for a new session, or None if unavailable."""
        ...

    @abstractmethod
    async def load_snapshot(self, snapshot_id: str) -> Optional[PriceSnapshot]:
        """Return a previously handed out snapshot by id, or None."""
        ...


class InMemoryPriceSnapshotProvider(IPriceSnapshotProvider):
    """Provider fed by publish(); keeps every snapshot it has seen."""

    def __init__(self) -> None:
        self._latest: dict[tuple[str, str], PriceSnapshot] = {}
        self._by_id: dict[str, PriceSnapshot] = {}

    def publish(self, game: str, snapshot: PriceSnapshot) -> None:
        """Make snapshot the latest one for (game, snapshot.league)."""
        self._latest[(game, snapshot.league)] = snapshot
        self._by_id[snapshot.id] = snapshot

    async def get_snapshot(self, game: str, league: str) -> Optional[PriceSnapshot]:
        return self._latest.get((game, league))

    async def load_snapshot(self, snapshot_id: str) -> Optional[PriceSnapshot]:
        return self._by_id.get(snapshot_id)


class CachedPriceSnapshotProvider(IPriceSnapshotProvider):
    """Reuses a snapshot per (game, league) for ttl_seconds before asking the inner provider again.

    Uses cachetools.TTLCache so a restart-heavy workflow does not refetch prices
    on every session start.
    """

    def __init__(
        self,
        inner: IPriceSnapshotProvider,
        *,
        ttl_seconds: float = 6 * 3600,
        maxsize: int = 32,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            inner: Provider consulted on cache miss (injected).
            ttl_seconds: How long a snapshot is reused.
            maxsize: Maximum number of (game, league) entries kept.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._inner = inner
        self._cache: TTLCache[tuple[str, str], PriceSnapshot] = TTLCache(
            maxsize=max(1, maxsize), ttl=ttl_seconds
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_snapshot(self, game: str, league: str) -> Optional[PriceSnapshot]:
        key = (game, league)
        cached = self._cache.get(key)
        if cached is not None:
            self._logger.debug("price_snapshot_reused", game=game, league=league, snapshot_id=cached.id)
            return cached
        snapshot = await self._inner.get_snapshot(game, league)
        if snapshot is not None:
            self._cache[key] = snapshot
            self._logger.debug("price_snapshot_cached", game=game, league=league, snapshot_id=snapshot.id)
        return snapshot

    async def load_snapshot(self, snapshot_id: str) -> Optional[PriceSnapshot]:
        for snapshot in self._cache.values():
            if snapshot.id == snapshot_id:
                return snapshot
        return await self._inner.load_snapshot(snapshot_id)

    def invalidate(self, game: str, league: str) -> None:
        """Drop the cached snapshot of (game, league)."""
        self._cache.pop((game, league), None)
