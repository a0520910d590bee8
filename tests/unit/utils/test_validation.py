# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

from stacked_deck_tracker.utils import is_game_id, mask_path


def test_is_game_id() -> None:
    assert is_game_id("poe1")
    assert is_game_id("poe2")
    assert not is_game_id("POE1")
    assert not is_game_id(None)


def test_mask_path_keeps_last_two_parts() -> None:
    assert mask_path("/home/exile/games/poe/logs/Client.txt") == ".../logs/Client.txt"
    assert mask_path("Client.txt") == "Client.txt"
    assert mask_path(None) == "***"
