# -*- coding: utf-8 -*-
"""Unit tests for the structlog processors and renderer selection."""

from __future__ import annotations

import structlog

from stacked_deck_tracker.config import LoggingSettings
from stacked_deck_tracker.logging.config import _renderer, mask_path_fields


def test_log_paths_are_masked() -> None:
    event = {"event": "log_watch_started", "log_path": "/home/exile/games/poe/logs/Client.txt", "game": "poe1"}

    masked = mask_path_fields(None, "info", event)

    assert masked["log_path"] == ".../logs/Client.txt"
    assert masked["game"] == "poe1"


def test_missing_or_none_path_is_left_alone() -> None:
    assert mask_path_fields(None, "info", {"event": "x", "log_path": None}) == {"event": "x", "log_path": None}
    assert mask_path_fields(None, "info", {"event": "x"}) == {"event": "x"}


def test_renderer_selection() -> None:
    assert isinstance(_renderer(LoggingSettings(json_format=True)), structlog.processors.JSONRenderer)
    assert isinstance(_renderer(LoggingSettings(log_to_file=True)), structlog.processors.JSONRenderer)
    assert isinstance(_renderer(LoggingSettings()), structlog.dev.ConsoleRenderer)
    assert _renderer(LoggingSettings(log_to_console=False)) is None
