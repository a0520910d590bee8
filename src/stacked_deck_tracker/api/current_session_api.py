# -*- coding: utf-8 -*-
"""Boundary API for the host application.

Every call returns an ApiResult; exceptions never cross this boundary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar

import structlog

from stacked_deck_tracker.clients.settings_store import SettingsKey, log_path_key
from stacked_deck_tracker.models.price_snapshot import PriceSnapshot, PriceSource
from stacked_deck_tracker.services.session.dto import CurrentSessionData, StopSessionResult
from stacked_deck_tracker.utils import GAME_IDS, is_game_id

if TYPE_CHECKING:
    from stacked_deck_tracker.clients.price_provider import (
        CachedPriceSnapshotProvider,
        InMemoryPriceSnapshotProvider,
    )
    from stacked_deck_tracker.clients.settings_store import ISettingsStore
    from stacked_deck_tracker.services.log_watch import LogWatchController
    from stacked_deck_tracker.services.session import SessionAggregator

T = TypeVar("T")


@dataclass
class ApiResult(Generic[T]):
    """Result of a boundary call."""

    success: bool = False
    data: T | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _validate_game(game: str) -> str:
    if not is_game_id(game):
        raise ValueError(f"Invalid game: {game!r} (expected one of {', '.join(GAME_IDS)})")
    return game


class CurrentSessionApi:
    """start/stop/query the current session and point the watcher at a log file."""

    def __init__(
        self,
        session_aggregator: SessionAggregator,
        log_watch_controller: LogWatchController,
        settings_store: ISettingsStore,
        *,
        price_source: Optional[InMemoryPriceSnapshotProvider] = None,
        price_cache: Optional[CachedPriceSnapshotProvider] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._aggregator = session_aggregator
        self._watch = log_watch_controller
        self._settings_store = settings_store
        self._price_source = price_source
        self._price_cache = price_cache
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def start_session(self, game: str, league: str) -> ApiResult[str]:
        """Start a session; data is the new session id."""
        try:
            _validate_game(game)
            if not league or not league.strip():
                raise ValueError("league must be non-empty")
            record = await self._aggregator.start_session(game, league.strip())
            return ApiResult(success=True, data=str(record.id))
        except Exception as e:
            self._logger.exception("api_start_session_failed", game=game, league=league, error=str(e))
            return ApiResult(success=False, error=str(e))

    async def stop_session(self, game: str) -> ApiResult[StopSessionResult]:
        try:
            _validate_game(game)
            result = await self._aggregator.stop_session(game)
            return ApiResult(success=True, data=result)
        except Exception as e:
            self._logger.exception("api_stop_session_failed", game=game, error=str(e))
            return ApiResult(success=False, error=str(e))

    async def is_session_active(self, game: str) -> ApiResult[bool]:
        try:
            _validate_game(game)
            return ApiResult(success=True, data=self._aggregator.is_session_active(game))
        except Exception as e:
            self._logger.exception("api_is_session_active_failed", game=game, error=str(e))
            return ApiResult(success=False, error=str(e))

    async def get_current_session(self, game: str) -> ApiResult[CurrentSessionData]:
        """Current session view; the zero shape when no session is active."""
        try:
            _validate_game(game)
            return ApiResult(success=True, data=await self._aggregator.get_current_session(game))
        except Exception as e:
            self._logger.exception("api_get_current_session_failed", game=game, error=str(e))
            return ApiResult(success=False, error=str(e))

    async def set_log_path(self, path: str, game: str) -> ApiResult[bool]:
        """Store the client log path of game and watch it if game is the selected one.

        data is True when the file is now being watched.
        """
        try:
            _validate_game(game)
            await self._settings_store.set(log_path_key(game), path)
            selected = await self._settings_store.get(SettingsKey.SELECTED_GAME)
            if selected != game:
                return ApiResult(success=True, data=False)
            watching = await self._watch.set_target(path, game)
            return ApiResult(success=True, data=watching)
        except Exception as e:
            self._logger.exception("api_set_log_path_failed", game=game, log_path=path, error=str(e))
            return ApiResult(success=False, error=str(e))

    async def publish_price_snapshot(self, game: str, snapshot: PriceSnapshot) -> ApiResult[bool]:
        """Hand a freshly fetched snapshot to the engine.

        It becomes the snapshot for new sessions of (game, snapshot.league), and
        replaces the valuation of the active session when it runs in that league.
        data is True when the active session picked it up.
        """
        try:
            _validate_game(game)
            if self._price_source is None:
                raise RuntimeError("No price source configured")
            self._price_source.publish(game, snapshot)
            if self._price_cache is not None:
                self._price_cache.invalidate(game, snapshot.league)
            info = self._aggregator.get_active_session_info(game)
            if info is None or info.league != snapshot.league:
                return ApiResult(success=True, data=False)
            await self._aggregator.set_price_snapshot(game, snapshot)
            return ApiResult(success=True, data=True)
        except Exception as e:
            self._logger.exception(
                "api_publish_price_snapshot_failed",
                game=game,
                snapshot_id=snapshot.id,
                error=str(e),
            )
            return ApiResult(success=False, error=str(e))

    async def update_card_price_visibility(
        self,
        game: str,
        session_id: str,
        price_source: str,
        card_name: str,
        hide_price: bool,
    ) -> ApiResult[bool]:
        """Hide or show a card's price ("exchange" or "stash"); session_id may be "current"."""
        try:
            _validate_game(game)
            source = PriceSource(price_source)
            updated = await self._aggregator.update_card_price_visibility(
                game, session_id, source, card_name, hide_price
            )
            if not updated:
                return ApiResult(success=False, data=False, error=f"Card not found in session: {card_name}")
            return ApiResult(success=True, data=True)
        except Exception as e:
            self._logger.exception(
                "api_update_card_price_visibility_failed",
                game=game,
                session_id=session_id,
                card_name=card_name,
                error=str(e),
            )
            return ApiResult(success=False, error=str(e))
