# -*- coding: utf-8 -*-
"""
Entry point for the stacked deck tracker.

Orchestrates: logging, settings, container, database, orphaned session recovery,
log watch of the selected game, shutdown (SIGINT or CancelledError).
Card drops flow: client log -> LogWatchController tick -> parser/dedup -> SessionAggregator.
Prices are not fetched here: the host feeds snapshots through
CurrentSessionApi.publish_price_snapshot; until it does, session totals stay at zero.

Run with: python -m stacked_deck_tracker.main

Notebook usage:
    from stacked_deck_tracker.main import run
    await run()  # Interrupt kernel to stop; sessions are stopped and pending ids flushed.
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from stacked_deck_tracker.clients.settings_store import SettingsKey
from stacked_deck_tracker.DI import Container
from stacked_deck_tracker.config import get_settings
from stacked_deck_tracker.exceptions import MissingRequiredConfigError
from stacked_deck_tracker.logging.config import configure_logging
from stacked_deck_tracker.services.log_watch import LogWatchController
from stacked_deck_tracker.services.session import SessionAggregator
from stacked_deck_tracker.utils import GAME_IDS, is_game_id


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def _do_shutdown(
    logger: Any,
    log_watch: LogWatchController,
    aggregator: SessionAggregator,
) -> None:
    """Clean shutdown. Safe to call on normal shutdown or CancelledError.

    Running sessions are stopped so their summaries are written.
    """
    await log_watch.stop()
    for game in GAME_IDS:
        if aggregator.is_session_active(game):
            result = await aggregator.stop_session(game)
            logger.info("main_session_stopped", game=game, total_count=result.total_count)
    await log_watch.shutdown()
    logger.info("main_shutdown_complete")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()

    container = Container()
    database = container.database()
    await database.init_db()

    aggregator = container.session_aggregator()
    recovered = await aggregator.recover_orphaned_sessions()
    logger.info("main_orphaned_sessions_recovered", session_count=recovered)

    settings_store = container.settings_store()
    log_watch = container.log_watch_controller()

    game = await settings_store.get(SettingsKey.SELECTED_GAME)
    if not is_game_id(game):
        logger.error("main_invalid_selected_game", game=game, message="GAME__SELECTED_GAME is invalid")
        await database.dispose()
        raise MissingRequiredConfigError("GAME__SELECTED_GAME")

    log_path = await settings_store.get_log_path(game)
    if log_path is None:
        logger.warning("main_log_path_not_set", game=game)
    else:
        watching = await log_watch.set_target(log_path, game)
        logger.info(
            "main_log_watch",
            game=game,
            log_path=log_path,
            watching=watching,
            poll_interval_seconds=settings.watch.poll_interval_seconds,
        )

    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)
    try:
        try:
            await shutdown_event.wait()
        except asyncio.CancelledError:
            await _do_shutdown(logger, log_watch, aggregator)
            raise

        await _do_shutdown(logger, log_watch, aggregator)
    finally:
        await database.dispose()


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
