"""Custom exceptions for log ingestion and session tracking."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker errors."""

    pass


class MissingRequiredConfigError(TrackerError):
    """Raised when a required configuration value is missing."""

    pass


class SessionAlreadyActiveError(TrackerError):
    """Raised when starting a session for a game that already has one running."""

    def __init__(self, game: str) -> None:
        super().__init__(f"Session already active for {game}")
        self.game = game


class NoActiveSessionError(TrackerError):
    """Raised when an operation needs an active session and the game has none."""

    def __init__(self, game: str) -> None:
        super().__init__(f"No active session for {game}")
        self.game = game


class InvalidExchangeRateError(TrackerError):
    """Raised when a chaos-to-divine ratio is non-finite or not positive."""

    def __init__(self, ratio: float) -> None:
        super().__init__(f"Invalid chaos-to-divine ratio: {ratio!r}")
        self.ratio = ratio


class TailReadError(TrackerError):
    """Raised when the tail of a file cannot be read consistently."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PersistenceError(TrackerError):
    """Raised when a repository write fails."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
