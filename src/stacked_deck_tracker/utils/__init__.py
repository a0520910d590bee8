# -*- coding: utf-8 -*-
"""Utility modules."""

from stacked_deck_tracker.utils.validation import GAME_IDS, is_game_id, mask_path

__all__ = ["GAME_IDS", "is_game_id", "mask_path"]
