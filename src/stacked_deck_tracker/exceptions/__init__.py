"""Exceptions subpackage."""

from stacked_deck_tracker.exceptions.exceptions import (
    InvalidExchangeRateError,
    MissingRequiredConfigError,
    NoActiveSessionError,
    PersistenceError,
    SessionAlreadyActiveError,
    TailReadError,
    TrackerError,
)

__all__ = [
    "InvalidExchangeRateError",
    "MissingRequiredConfigError",
    "NoActiveSessionError",
    "PersistenceError",
    "SessionAlreadyActiveError",
    "TailReadError",
    "TrackerError",
]
