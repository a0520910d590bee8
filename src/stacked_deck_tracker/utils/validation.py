"""Validation helpers for game ids and file paths."""

from __future__ import annotations

from pathlib import PurePath
from typing import Any

GAME_IDS = ("poe1", "poe2")


def is_game_id(x: Any) -> bool:
    """Return True if x is a supported game id."""
    return isinstance(x, str) and x in GAME_IDS


def mask_path(path: str | None) -> str:
    """Return the last two components of a path for logging (e.g. .../logs/Client.txt)."""
    if not path:
        return "***"
    parts = PurePath(path).parts
    if len(parts) <= 2:
        return str(PurePath(*parts))
    return str(PurePath("...", *parts[-2:]))
