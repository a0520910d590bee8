# -*- coding: utf-8 -*-
"""Log watch controller: polls the client log and feeds new card drops to the aggregator.

One WatchTarget at a time. Each tick reads the tail of the file, parses it
against the already processed ids, records the new drops and flushes the
dedup buffer. Ticks are serialized by a single-flight lock; a tick that
fails is logged and polling continues.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, Optional, Type

import structlog

from stacked_deck_tracker.models.watch_target import WatchTarget
from stacked_deck_tracker.services.event_parser import parse_cards

if TYPE_CHECKING:
    from stacked_deck_tracker.services.dedup import DedupStore
    from stacked_deck_tracker.services.session import SessionAggregator
    from stacked_deck_tracker.services.tail_reader import TailReader


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick."""

    game: Optional[str] = None
    accepted: int = 0
    """Card drops recorded by this tick."""
    skipped: bool = False
    reason: Optional[str] = None
    """Why the tick was skipped: no_target, no_active_session or busy."""


class LogWatchController:
    """Owns the polling task of the active WatchTarget."""

    def __init__(
        self,
        tail_reader: TailReader,
        dedup_store: DedupStore,
        session_aggregator: SessionAggregator,
        *,
        poll_interval_seconds: float = 0.1,
        tail_lines: int = 10,
        skip_when_busy: bool = True,
        require_active_session: bool = True,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            tail_reader: Reads the last lines of the log (injected).
            dedup_store: Processed id sets, flushed after each productive tick (injected).
            session_aggregator: Receives the new card drops (injected).
            poll_interval_seconds: Delay between ticks.
            tail_lines: Lines read from the end of the log on each tick.
            skip_when_busy: Skip a tick while another one holds the lock (False waits for it).
            require_active_session: Do not read the file while the game has no active session.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._reader = tail_reader
        self._dedup = dedup_store
        self._aggregator = session_aggregator
        self._poll_interval = poll_interval_seconds
        self._tail_lines = tail_lines
        self._skip_when_busy = skip_when_busy
        self._require_active_session = require_active_session
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._target: Optional[WatchTarget] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._lifecycle_lock = asyncio.Lock()
        self._tick_lock = asyncio.Lock()

    async def __aenter__(self) -> LogWatchController:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        await self.shutdown()
        return False

    @property
    def target(self) -> Optional[WatchTarget]:
        return self._target

    @property
    def is_watching(self) -> bool:
        return self._task is not None and not self._task.done()

    async def set_target(self, path: str, game: str) -> bool:
        """Stop the current watch and start polling path for game.

        Returns False (nothing is watched) if the file does not exist.
        """
        await self.stop()
        if not os.path.isfile(path):
            self._logger.warning("log_watch_file_missing", log_path=path, game=game)
            return False

        target = WatchTarget.create(
            path,
            game,
            poll_interval_seconds=self._poll_interval,
            tail_lines=self._tail_lines,
        )
        await self._dedup.load(game)
        async with self._lifecycle_lock:
            self._target = target
            self._task = asyncio.create_task(self._poll_loop(target))
        self._logger.info(
            "log_watch_started",
            log_path=target.path,
            game=target.game,
            poll_interval_seconds=target.poll_interval_seconds,
            tail_lines=target.tail_lines,
        )
        return True

    async def stop(self) -> None:
        """Cancel polling and wait for the task to finish. Idempotent.

        A tick already in flight runs to completion first; the task is only
        cancelled between ticks, so no drop is left marked but unrecorded.
        """
        async with self._lifecycle_lock:
            task = self._task
            target = self._target
            self._task = None
            self._target = None
        if task is None:
            return
        async with self._tick_lock:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._logger.info(
            "log_watch_stopped",
            log_path=target.path if target else None,
            game=target.game if target else None,
        )

    async def shutdown(self) -> None:
        """Stop polling and flush every pending processed id."""
        await self.stop()
        flushed = await self._dedup.flush()
        self._logger.info("log_watch_shutdown_complete", dedup_flushed_count=flushed)

    async def tick(self) -> TickResult:
        """Run one read-parse-record pass on the current target. Errors propagate."""
        target = self._target
        if target is None:
            return TickResult(skipped=True, reason="no_target")
        game = target.game
        if self._require_active_session and not self._aggregator.is_session_active(game):
            return TickResult(game=game, skipped=True, reason="no_active_session")
        if self._skip_when_busy and self._tick_lock.locked():
            self._logger.debug("log_watch_tick_skipped_busy", game=game)
            return TickResult(game=game, skipped=True, reason="busy")

        async with self._tick_lock:
            text = await self._reader.read(target.path, target.tail_lines)
            if not self._aggregator.is_session_active(game):
                return TickResult(game=game, skipped=True, reason="no_active_session")
            parsed = parse_cards(text, self._dedup.processed_ids(game))
            accepted = 0
            for event in parsed.events(game):
                if await self._aggregator.record_event(event.game, event.card_name, event.instance_id):
                    accepted += 1
            if accepted:
                await self._dedup.flush(game)
                self._logger.debug("log_watch_cards_accepted", game=game, accepted_count=accepted)
            return TickResult(game=game, accepted=accepted)

    async def _poll_loop(self, target: WatchTarget) -> None:
        """Tick every poll interval until cancelled."""
        self._logger.debug("log_watch_poll_started", log_path=target.path, game=target.game)
        try:
            while True:
                try:
                    await self.tick()
                except Exception as e:
                    self._logger.exception(
                        "log_watch_tick_failed",
                        log_path=target.path,
                        game=target.game,
                        error_type=type(e).__name__,
                        error=str(e),
                    )
                await asyncio.sleep(target.poll_interval_seconds)
        except asyncio.CancelledError:
            self._logger.debug("log_watch_poll_cancelled", log_path=target.path, game=target.game)
            raise
