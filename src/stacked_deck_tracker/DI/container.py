# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from stacked_deck_tracker.api import CurrentSessionApi
from stacked_deck_tracker.clients import (
    CachedPriceSnapshotProvider,
    InMemoryPriceSnapshotProvider,
    InMemorySettingsStore,
)
from stacked_deck_tracker.config import Settings, get_settings
from stacked_deck_tracker.events.bus import build_event_bus
from stacked_deck_tracker.persistence.db import Database
from stacked_deck_tracker.persistence.repositories.sql import (
    SqlCardStatRepository,
    SqlProcessedIdRepository,
    SqlRarityRepository,
    SqlSessionCardRepository,
    SqlSessionRepository,
)
from stacked_deck_tracker.services.dedup import DedupStore
from stacked_deck_tracker.services.log_watch import LogWatchController
from stacked_deck_tracker.services.rarity import RarityService
from stacked_deck_tracker.services.session import SessionAggregator
from stacked_deck_tracker.services.tail_reader import TailReader


def _build_price_provider(
    settings: Settings,
    inner: InMemoryPriceSnapshotProvider,
) -> CachedPriceSnapshotProvider:
    """Wrap the snapshot source with the reuse cache sized from settings."""
    return CachedPriceSnapshotProvider(
        inner,
        ttl_seconds=settings.price.snapshot_ttl_seconds,
        maxsize=settings.price.snapshot_cache_size,
    )


def _recent_drops_size(settings: Settings) -> int:
    return settings.session.recent_drops_size


def _build_log_watch_controller(
    settings: Settings,
    tail_reader: TailReader,
    dedup_store: DedupStore,
    session_aggregator: SessionAggregator,
) -> LogWatchController:
    w = settings.watch
    return LogWatchController(
        tail_reader=tail_reader,
        dedup_store=dedup_store,
        session_aggregator=session_aggregator,
        poll_interval_seconds=w.poll_interval_seconds,
        tail_lines=w.tail_lines,
        skip_when_busy=w.skip_when_busy,
        require_active_session=w.require_active_session,
    )


class Container(containers.DeclarativeContainer):
    """Application container. Each service is built once and wired explicitly."""

    config = providers.Callable(get_settings)

    database = providers.Singleton(Database.from_settings, config)

    event_bus = providers.Singleton(build_event_bus)

    processed_id_repository = providers.Singleton(SqlProcessedIdRepository, database=database)

    session_repository = providers.Singleton(SqlSessionRepository, database=database)

    session_card_repository = providers.Singleton(SqlSessionCardRepository, database=database)

    rarity_repository = providers.Singleton(SqlRarityRepository, database=database)

    card_stat_repository = providers.Singleton(SqlCardStatRepository, database=database)

    settings_store = providers.Singleton(InMemorySettingsStore.from_settings, config)

    price_source = providers.Singleton(InMemoryPriceSnapshotProvider)

    price_provider = providers.Singleton(_build_price_provider, config, price_source)

    tail_reader = providers.Singleton(TailReader)

    dedup_store = providers.Singleton(
        DedupStore,
        processed_id_repository=processed_id_repository,
    )

    rarity_service = providers.Singleton(
        RarityService,
        rarity_repository=rarity_repository,
    )

    session_aggregator = providers.Singleton(
        SessionAggregator,
        session_repository=session_repository,
        session_card_repository=session_card_repository,
        card_stat_repository=card_stat_repository,
        dedup_store=dedup_store,
        price_provider=price_provider,
        rarity_service=rarity_service,
        event_bus=event_bus,
        recent_drops_size=providers.Callable(_recent_drops_size, config),
    )

    log_watch_controller = providers.Singleton(
        _build_log_watch_controller,
        config,
        tail_reader,
        dedup_store,
        session_aggregator,
    )

    current_session_api = providers.Singleton(
        CurrentSessionApi,
        session_aggregator=session_aggregator,
        log_watch_controller=log_watch_controller,
        settings_store=settings_store,
        price_source=price_source,
        price_cache=price_provider,
    )
