"""WatchTarget: the client log file being polled for one game."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WatchTarget:
    """File path, game and polling cadence of the active watch."""

    path: str
    game: str
    poll_interval_seconds: float = 0.1
    tail_lines: int = 10

    @classmethod
    def create(
        cls,
        path: str,
        game: str,
        *,
        poll_interval_seconds: float = 0.1,
        tail_lines: int = 10,
    ) -> WatchTarget:
        path = path.strip()
        game = game.strip()
        if not path or not game:
            raise ValueError("path and game must be non-empty")
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")
        return cls(
            path=path,
            game=game,
            poll_interval_seconds=poll_interval_seconds,
            tail_lines=max(1, tail_lines),
        )
