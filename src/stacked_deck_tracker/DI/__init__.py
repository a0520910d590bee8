"""Dependency injection."""

from stacked_deck_tracker.DI.container import Container

__all__ = ["Container"]
