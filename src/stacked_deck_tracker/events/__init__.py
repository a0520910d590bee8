# -*- coding: utf-8 -*-
"""Event bus and event types."""

from stacked_deck_tracker.events.bus import build_event_bus
from stacked_deck_tracker.events.session_events import (
    SessionDataUpdatedEvent,
    SessionStateChangedEvent,
)

__all__ = ["build_event_bus", "SessionDataUpdatedEvent", "SessionStateChangedEvent"]
