# -*- coding: utf-8 -*-
"""Typed key-value settings store (selected game and client log paths)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from stacked_deck_tracker.config import Settings


class SettingsKey(str, Enum):
    """Keys the engine reads from the settings store."""

    SELECTED_GAME = "selected_game"
    POE1_LOG_PATH = "poe1_log_path"
    POE2_LOG_PATH = "poe2_log_path"


def log_path_key(game: str) -> SettingsKey:
    """Return the log path key of a game."""
    if game == "poe1":
        return SettingsKey.POE1_LOG_PATH
    if game == "poe2":
        return SettingsKey.POE2_LOG_PATH
    raise ValueError(f"Unknown game: {game!r}")


class ISettingsStore(ABC):
    """get/set store owned by the host application."""

    @abstractmethod
    async def get(self, key: SettingsKey) -> Any:
        """Return the value of key, or None if unset."""
        ...

    @abstractmethod
    async def set(self, key: SettingsKey, value: Any) -> None:
        """Store value under key."""
        ...

    async def get_log_path(self, game: str) -> Optional[str]:
        """Return the configured client log path of a game, or None."""
        value = await self.get(log_path_key(game))
        return str(value) if value else None


class InMemorySettingsStore(ISettingsStore):
    """Settings store kept in a dict, seeded from Settings.game."""

    def __init__(self, initial: Optional[dict[SettingsKey, Any]] = None) -> None:
        self._values: dict[SettingsKey, Any] = dict(initial or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> InMemorySettingsStore:
        g = settings.game
        return cls(
            {
                SettingsKey.SELECTED_GAME: g.selected_game,
                SettingsKey.POE1_LOG_PATH: g.poe1_log_path,
                SettingsKey.POE2_LOG_PATH: g.poe2_log_path,
            }
        )

    async def get(self, key: SettingsKey) -> Any:
        return self._values.get(key)

    async def set(self, key: SettingsKey, value: Any) -> None:
        self._values[key] = value
