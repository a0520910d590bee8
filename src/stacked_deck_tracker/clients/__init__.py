"""External collaborators: price snapshots and the settings store."""

from stacked_deck_tracker.clients.price_provider import (
    CachedPriceSnapshotProvider,
    InMemoryPriceSnapshotProvider,
    IPriceSnapshotProvider,
)
from stacked_deck_tracker.clients.settings_store import (
    InMemorySettingsStore,
    ISettingsStore,
    SettingsKey,
    log_path_key,
)

__all__ = [
    "CachedPriceSnapshotProvider",
    "IPriceSnapshotProvider",
    "ISettingsStore",
    "InMemoryPriceSnapshotProvider",
    "InMemorySettingsStore",
    "SettingsKey",
    "log_path_key",
]
