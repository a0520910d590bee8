"""Session aggregator: per-game session state machine and running totals."""

from __future__ import annotations

import asyncio
import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

import structlog

from stacked_deck_tracker.events.session_events import (
    SessionDataUpdatedEvent,
    SessionStateChangedEvent,
)
from stacked_deck_tracker.exceptions import NoActiveSessionError, SessionAlreadyActiveError
from stacked_deck_tracker.models.card_stat import ALL_TIME_SCOPE
from stacked_deck_tracker.models.card_tally import CardTally
from stacked_deck_tracker.models.price_snapshot import PriceSnapshot, PriceSource
from stacked_deck_tracker.models.processed_id import DedupScope
from stacked_deck_tracker.models.rarity import RarityTier
from stacked_deck_tracker.models.session_record import SessionRecord
from stacked_deck_tracker.models.session_summary import SessionSummary
from stacked_deck_tracker.services.session.dto import (
    ActiveSessionInfo,
    CardEntryView,
    CurrentSessionData,
    PriceView,
    RecentDrop,
    SessionTotals,
    SourceTotals,
    StopSessionResult,
)

if TYPE_CHECKING:
    from stacked_deck_tracker.clients.price_provider import IPriceSnapshotProvider
    from stacked_deck_tracker.persistence.repositories.interfaces import (
        ICardStatRepository,
        ISessionCardRepository,
        ISessionRepository,
    )
    from stacked_deck_tracker.services.dedup.dedup_store import DedupStore
    from stacked_deck_tracker.services.rarity.rarity_service import RarityService

CURRENT_SESSION = "current"
"""Session id alias accepted by update_card_price_visibility."""


@dataclass
class _ActiveSession:
    record: SessionRecord
    snapshot: PriceSnapshot | None
    recent_drops: deque[RecentDrop] = field(default_factory=deque)


def calculate_totals(
    tallies: list[CardTally],
    snapshot: PriceSnapshot | None,
    total_count: int,
) -> SessionTotals:
    """Totals per source from scratch: sum of count * chaos over visible prices, minus deck cost."""
    if snapshot is None:
        return SessionTotals()
    exchange_total = 0.0
    stash_total = 0.0
    for t in tallies:
        exchange_price = snapshot.exchange.get(t.card_name)
        if exchange_price is not None and not t.hide_price_exchange:
            exchange_total += exchange_price.chaos_value * t.count
        stash_price = snapshot.stash.get(t.card_name)
        if stash_price is not None and not t.hide_price_stash:
            stash_total += stash_price.chaos_value * t.count
    deck_cost = snapshot.stacked_deck_chaos_cost or 0.0
    total_deck_cost = deck_cost * total_count
    return SessionTotals(
        exchange=SourceTotals(
            total_value=exchange_total,
            net_profit=exchange_total - total_deck_cost,
            chaos_to_divine_ratio=snapshot.exchange.chaos_to_divine_ratio,
        ),
        stash=SourceTotals(
            total_value=stash_total,
            net_profit=stash_total - total_deck_cost,
            chaos_to_divine_ratio=snapshot.stash.chaos_to_divine_ratio,
        ),
        stacked_deck_chaos_cost=deck_cost,
        total_deck_cost=total_deck_cost,
    )


def _price_view(snapshot: PriceSnapshot, source: PriceSource, tally: CardTally) -> PriceView:
    price = snapshot.source(source).get(tally.card_name)
    hidden = tally.is_price_hidden(source)
    if price is None:
        return PriceView(hide_price=hidden)
    return PriceView(
        chaos_value=price.chaos_value,
        divine_value=price.divine_value,
        total_value=price.chaos_value * tally.count,
        hide_price=hidden,
    )


class SessionAggregator:
    """Owns the Inactive -> Active -> Inactive lifecycle of one session per game.

    Accepted card events update the per-card tallies, the session total, the
    cascaded card stats and the recent drops buffer. Totals are recomputed
    from the tallies and the session's price snapshot on every read.
    """

    def __init__(
        self,
        session_repository: ISessionRepository,
        session_card_repository: ISessionCardRepository,
        card_stat_repository: ICardStatRepository,
        dedup_store: DedupStore,
        price_provider: IPriceSnapshotProvider,
        *,
        rarity_service: RarityService | None = None,
        event_bus: Optional[Any] = None,
        recent_drops_size: int = 10,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            session_repository: Session records and summaries (injected).
            session_card_repository: Per-session card tallies (injected).
            card_stat_repository: All-time and per-league card counts (injected).
            dedup_store: Processed id sets (injected).
            price_provider: Source of price snapshots (injected).
            rarity_service: Optional; refreshes rarities when a snapshot is attached.
            event_bus: Optional; if set, session state and data events are dispatched.
            recent_drops_size: Capacity of the recent drops buffer.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._sessions = session_repository
        self._cards = session_card_repository
        self._stats = card_stat_repository
        self._dedup = dedup_store
        self._prices = price_provider
        self._rarity = rarity_service
        self._event_bus = event_bus
        self._recent_drops_size = max(1, recent_drops_size)
        self._active: dict[str, _ActiveSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _lock(self, game: str) -> asyncio.Lock:
        return self._locks.setdefault(game, asyncio.Lock())

    def _require_active(self, game: str) -> _ActiveSession:
        state = self._active.get(game)
        if state is None:
            raise NoActiveSessionError(game)
        return state

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def recover_orphaned_sessions(self, games: tuple[str, ...] = ("poe1", "poe2")) -> int:
        """Close sessions left active by an abrupt shutdown. Call once at startup."""
        now = datetime.now(UTC)
        recovered = 0
        for game in games:
            if game in self._active:
                continue
            count = await self._sessions.deactivate_all(game, now)
            if count:
                self._logger.warning("session_orphans_recovered", game=game, session_count=count)
            recovered += count
        return recovered

    async def start_session(self, game: str, league: str) -> SessionRecord:
        """Start a session for game in league.

        Raises:
            SessionAlreadyActiveError: The game already has an active session.
        """
        async with self._lock(game):
            if game in self._active:
                raise SessionAlreadyActiveError(game)
            if await self._sessions.get_active_for_game(game) is not None:
                raise SessionAlreadyActiveError(game)

            snapshot = await self._fetch_snapshot(game, league)
            record = SessionRecord.create(
                game,
                league,
                snapshot_id=snapshot.id if snapshot is not None else None,
            )
            await self._dedup.ensure_loaded(game)
            self._dedup.clear_session(game)
            await self._sessions.save(record)
            self._active[game] = _ActiveSession(
                record=record,
                snapshot=snapshot,
                recent_drops=deque(maxlen=self._recent_drops_size),
            )
            if snapshot is not None:
                await self._refresh_rarities(game, league, snapshot)

        self._logger.info(
            "session_started",
            game=game,
            league=league,
            session_id=str(record.id),
            snapshot_id=record.snapshot_id,
        )
        self._dispatch_state(record)
        return record

    async def stop_session(self, game: str) -> StopSessionResult:
        """Stop the active session of game, write its summary and return the final count.

        Raises:
            NoActiveSessionError: The game has no active session.
        """
        async with self._lock(game):
            state = self._require_active(game)
            await self._dedup.flush(game)

            ended_at = datetime.now(UTC)
            total_count = await self._cards.total_count(state.record.id)
            record = state.record.with_total_count(total_count).with_ended(ended_at)
            await self._sessions.save(record)
            tallies = await self._cards.list_by_session(record.id)
            await self._sessions.save_summary(self._build_summary(record, tallies, state.snapshot))

            self._dedup.clear_session(game)
            del self._active[game]

        duration_ms = int((ended_at - record.started_at).total_seconds() * 1000)
        self._logger.info(
            "session_stopped",
            game=game,
            league=record.league,
            session_id=str(record.id),
            total_count=total_count,
            duration_ms=duration_ms,
        )
        self._dispatch_state(record)
        return StopSessionResult(
            total_count=total_count,
            duration_ms=duration_ms,
            league=record.league,
            game=game,
        )

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    async def record_event(self, game: str, card_name: str, instance_id: str) -> bool:
        """Count one card drop. Returns False if the instance id was already processed.

        The id is marked processed before the writes; if a write fails the error
        is logged and re-raised and the id stays marked.

        Raises:
            NoActiveSessionError: The game has no active session.
        """
        async with self._lock(game):
            state = self._require_active(game)
            await self._dedup.ensure_loaded(game)
            if not (
                self._dedup.is_new(game, DedupScope.SESSION, instance_id)
                and self._dedup.is_new(game, DedupScope.GLOBAL, instance_id)
            ):
                return False
            self._dedup.mark_processed(game, DedupScope.SESSION, instance_id, card_name)
            self._dedup.mark_processed(game, DedupScope.GLOBAL, instance_id, card_name)

            now = datetime.now(UTC)
            record = state.record
            try:
                await self._cards.increment(record.id, card_name, now)
                record = record.with_incremented()
                await self._sessions.save(record)
                await self._stats.increment(game, ALL_TIME_SCOPE, card_name, now)
                await self._stats.increment(game, record.league, card_name, now)
            except Exception as e:
                self._logger.exception(
                    "session_record_event_failed",
                    game=game,
                    session_id=str(record.id),
                    card_name=card_name,
                    instance_id=instance_id,
                    error=str(e),
                )
                raise
            state.record = record
            state.recent_drops.appendleft(await self._recent_drop(state, card_name, instance_id, now))

        self._logger.debug(
            "session_card_recorded",
            game=game,
            session_id=str(record.id),
            card_name=card_name,
            instance_id=instance_id,
            total_count=record.total_count,
        )
        self._dispatch_data(record, card_name)
        return True

    async def _recent_drop(
        self,
        state: _ActiveSession,
        card_name: str,
        instance_id: str,
        dropped_at: datetime,
    ) -> RecentDrop:
        snapshot = state.snapshot
        exchange = snapshot.exchange.get(card_name) if snapshot is not None else None
        stash = snapshot.stash.get(card_name) if snapshot is not None else None
        rarity = RarityTier.UNKNOWN
        if self._rarity is not None:
            rarity = await self._rarity.effective_rarity(state.record.game, state.record.league, card_name)
        tally = await self._cards.get(state.record.id, card_name)
        if tally is not None and (tally.hide_price_exchange or tally.hide_price_stash):
            # Hidden prices are unreliable; do not advertise a rare drop.
            rarity = RarityTier.COMMON
        return RecentDrop(
            card_name=card_name,
            instance_id=instance_id,
            dropped_at=dropped_at,
            rarity=int(rarity),
            exchange_chaos_value=exchange.chaos_value if exchange else 0.0,
            exchange_divine_value=exchange.divine_value if exchange else 0.0,
            stash_chaos_value=stash.chaos_value if stash else 0.0,
            stash_divine_value=stash.divine_value if stash else 0.0,
        )

    # -------------------------------------------------------------------------
    # Prices
    # -------------------------------------------------------------------------

    async def _fetch_snapshot(self, game: str, league: str) -> PriceSnapshot | None:
        try:
            snapshot = await self._prices.get_snapshot(game, league)
        except Exception as e:
            self._logger.warning(
                "session_price_snapshot_unavailable",
                game=game,
                league=league,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None
        if snapshot is None:
            self._logger.warning("session_price_snapshot_missing", game=game, league=league)
        return snapshot

    async def _refresh_rarities(self, game: str, league: str, snapshot: PriceSnapshot) -> None:
        """Update rarities from snapshot. Failures are logged; the session stays as it is."""
        if self._rarity is None:
            return
        try:
            await self._rarity.update_from_snapshot(game, league, snapshot)
        except Exception as e:
            self._logger.warning(
                "session_rarity_refresh_failed",
                game=game,
                league=league,
                snapshot_id=snapshot.id,
                error_type=type(e).__name__,
                error=str(e),
            )

    async def set_price_snapshot(self, game: str, snapshot: PriceSnapshot) -> None:
        """Attach a new price snapshot to the active session.

        Raises:
            NoActiveSessionError: The game has no active session.
        """
        async with self._lock(game):
            state = self._require_active(game)
            record = state.record.with_snapshot(snapshot.id)
            await self._sessions.save(record)
            state.record = record
            state.snapshot = snapshot
            await self._refresh_rarities(game, record.league, snapshot)
        self._logger.info(
            "session_price_snapshot_replaced",
            game=game,
            session_id=str(record.id),
            snapshot_id=snapshot.id,
        )
        self._dispatch_data(record, None)

    async def update_card_price_visibility(
        self,
        game: str,
        session_id: str,
        source: PriceSource,
        card_name: str,
        hide: bool,
    ) -> bool:
        """Hide or show a card's price for one source. session_id may be "current".

        Returns False if the card has no tally in that session.

        Raises:
            NoActiveSessionError: session_id is "current" and the game has no active session.
            ValueError: session_id is not a valid UUID.
        """
        if session_id == CURRENT_SESSION:
            sid = self._require_active(game).record.id
        else:
            sid = UUID(session_id)
        updated = await self._cards.set_price_hidden(sid, card_name, source, hide)
        if updated is None:
            self._logger.warning(
                "session_card_not_found",
                game=game,
                session_id=str(sid),
                card_name=card_name,
            )
            return False
        self._logger.info(
            "session_card_price_visibility_updated",
            game=game,
            session_id=str(sid),
            card_name=card_name,
            price_source=source.value,
            hide_price=hide,
        )
        state = self._active.get(game)
        if state is not None and state.record.id == sid:
            self._dispatch_data(state.record, None)
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_session_active(self, game: str) -> bool:
        return game in self._active

    def get_active_session_info(self, game: str) -> ActiveSessionInfo | None:
        state = self._active.get(game)
        if state is None:
            return None
        return ActiveSessionInfo(
            session_id=str(state.record.id),
            league=state.record.league,
            started_at=state.record.started_at,
        )

    async def get_current_session(self, game: str) -> CurrentSessionData:
        """Full view of the active session, or the zero shape when there is none."""
        state = self._active.get(game)
        if state is None:
            return CurrentSessionData.empty(game)
        record = await self._sessions.get(state.record.id)
        if record is None:
            return CurrentSessionData.empty(game)

        snapshot = state.snapshot
        tallies = await self._cards.list_by_session(record.id)
        cards: list[CardEntryView] = []
        for t in tallies:
            rarity = RarityTier.UNKNOWN
            if self._rarity is not None:
                rarity = await self._rarity.effective_rarity(game, record.league, t.card_name)
            cards.append(
                CardEntryView(
                    name=t.card_name,
                    count=t.count,
                    rarity=int(rarity),
                    exchange_price=_price_view(snapshot, PriceSource.EXCHANGE, t) if snapshot else None,
                    stash_price=_price_view(snapshot, PriceSource.STASH, t) if snapshot else None,
                )
            )
        return CurrentSessionData(
            game=game,
            is_active=True,
            session_id=str(record.id),
            league=record.league,
            started_at=record.started_at,
            ended_at=record.ended_at,
            total_count=record.total_count,
            snapshot_id=record.snapshot_id,
            cards=cards,
            recent_drops=list(state.recent_drops),
            totals=calculate_totals(tallies, snapshot, record.total_count),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_summary(
        record: SessionRecord,
        tallies: list[CardTally],
        snapshot: PriceSnapshot | None,
    ) -> SessionSummary:
        totals = calculate_totals(tallies, snapshot, record.total_count)
        ended_at = record.ended_at or datetime.now(UTC)
        minutes = (ended_at - record.started_at).total_seconds() / 60
        return SessionSummary(
            session_id=record.id,
            game=record.game,
            league=record.league,
            started_at=record.started_at,
            ended_at=ended_at,
            duration_minutes=int(math.floor(minutes + 0.5)),
            total_decks_opened=record.total_count,
            total_exchange_value=totals.exchange.total_value,
            total_stash_value=totals.stash.total_value,
            total_exchange_net_profit=totals.exchange.net_profit,
            total_stash_net_profit=totals.stash.net_profit,
            exchange_chaos_to_divine=totals.exchange.chaos_to_divine_ratio,
            stash_chaos_to_divine=totals.stash.chaos_to_divine_ratio,
            stacked_deck_chaos_cost=totals.stacked_deck_chaos_cost,
        )

    def _dispatch_state(self, record: SessionRecord) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            SessionStateChangedEvent(
                game=record.game,
                is_active=record.is_active,
                session_id=str(record.id),
                league=record.league,
                started_at=record.started_at,
                ended_at=record.ended_at,
                total_count=record.total_count,
            )
        )

    def _dispatch_data(self, record: SessionRecord, card_name: str | None) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            SessionDataUpdatedEvent(
                game=record.game,
                session_id=str(record.id),
                total_count=record.total_count,
                card_name=card_name,
            )
        )
