"""Dedup store: in-memory processed id sets backed by a write-behind repository buffer."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from stacked_deck_tracker.models.processed_id import DedupScope, ProcessedId

if TYPE_CHECKING:
    from stacked_deck_tracker.persistence.repositories.interfaces.processed_id_repository import (
        IProcessedIdRepository,
    )


class DedupStore:
    """Tracks which card instance ids were already counted, per (game, scope).

    Marks land in memory immediately. Global-scope marks are also buffered and
    written through the repository on flush(); session-scope marks live only
    in memory and are dropped by clear_session().
    """

    def __init__(
        self,
        processed_id_repository: IProcessedIdRepository,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            processed_id_repository: Durable storage for global-scope ids (injected).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = processed_id_repository
        self._ids: dict[tuple[str, DedupScope], set[str]] = {}
        self._pending: dict[str, list[ProcessedId]] = {}
        self._loaded: set[str] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _set(self, game: str, scope: DedupScope) -> set[str]:
        return self._ids.setdefault((game, scope), set())

    async def load(self, game: str) -> int:
        """Refresh the global-scope cache of a game from the repository.

        Pending (unflushed) ids are kept. Returns the number of ids in the cache.
        """
        rows = await self._repo.list_by_game(game, DedupScope.GLOBAL)
        ids = {r.processed_id for r in rows}
        ids.update(p.processed_id for p in self._pending.get(game, []))
        self._ids[(game, DedupScope.GLOBAL)] = ids
        self._loaded.add(game)
        self._logger.debug("dedup_loaded", game=game, dedup_ids_count=len(ids))
        return len(ids)

    async def ensure_loaded(self, game: str) -> None:
        """Load the game's ids once."""
        if game not in self._loaded:
            await self.load(game)

    def is_loaded(self, game: str) -> bool:
        return game in self._loaded

    def is_new(self, game: str, scope: DedupScope, processed_id: str) -> bool:
        """Return True if the id was not processed yet for (game, scope)."""
        return processed_id not in self._ids.get((game, scope), ())

    def mark_processed(
        self,
        game: str,
        scope: DedupScope,
        processed_id: str,
        card_name: str | None = None,
    ) -> bool:
        """Mark an id as processed. Returns False if it already was."""
        ids = self._set(game, scope)
        if processed_id in ids:
            return False
        ids.add(processed_id)
        if scope is DedupScope.GLOBAL:
            self._pending.setdefault(game, []).append(
                ProcessedId.create(game, processed_id, scope=scope, card_name=card_name)
            )
        return True

    def processed_ids(self, game: str) -> frozenset[str]:
        """Union of the session and global ids of a game."""
        return frozenset(self._ids.get((game, DedupScope.SESSION), set())) | frozenset(
            self._ids.get((game, DedupScope.GLOBAL), set())
        )

    def pending_count(self, game: str | None = None) -> int:
        """Number of ids waiting for flush (one game or all)."""
        if game is not None:
            return len(self._pending.get(game, []))
        return sum(len(p) for p in self._pending.values())

    async def flush(self, game: str | None = None) -> int:
        """Write buffered ids through the repository (one game or all).

        On failure the buffer is kept for the next flush and the error is re-raised.
        Returns the number of ids written.
        """
        games = [game] if game is not None else list(self._pending)
        written = 0
        for g in games:
            pending = self._pending.get(g)
            if not pending:
                continue
            batch = list(pending)
            try:
                await self._repo.add_batch(batch)
            except Exception as e:
                self._logger.exception(
                    "dedup_flush_failed",
                    game=g,
                    dedup_pending_count=len(batch),
                    error=str(e),
                )
                raise
            del pending[: len(batch)]
            written += len(batch)
            self._logger.debug("dedup_flushed", game=g, dedup_written_count=len(batch))
        return written

    def clear_session(self, game: str) -> None:
        """Forget the session-scope ids of a game."""
        self._ids.pop((game, DedupScope.SESSION), None)

    async def reset(self, game: str, scope: DedupScope) -> int:
        """Explicit reset: drop cached, pending and persisted ids for (game, scope)."""
        self._ids.pop((game, scope), None)
        if scope is DedupScope.GLOBAL:
            self._pending.pop(game, None)
        removed = await self._repo.clear(game, scope)
        self._logger.info("dedup_reset", game=game, dedup_scope=scope.value, dedup_removed=removed)
        return removed
