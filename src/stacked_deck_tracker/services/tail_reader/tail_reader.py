"""Tail reader: last N lines of a growing file, scanned backward in fixed chunks."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from typing import Any

import structlog

from stacked_deck_tracker.exceptions import TailReadError

CHUNK_SIZE = 256
_NEWLINE = 0x0A


def read_last_lines(path: str, max_lines: int, encoding: str = "utf-8") -> str:
    """Return the text after the max_lines-th newline counted from the end of the file.

    If the file holds fewer than max_lines newlines the whole file is returned.
    The trailing newline counts as one, so "a\\nb\\n" with max_lines=1 yields "".
    Carriage returns are kept. max_lines <= 0 returns "" without touching the file.

    Raises:
        OSError: The file cannot be opened.
        TailReadError: Fewer bytes came back than the scan asked for
            (the file shrank while being read).
    """
    if max_lines <= 0:
        return ""

    chunks: list[bytes] = []
    newlines = 0
    with open(path, "rb") as f:
        position = f.seek(0, os.SEEK_END)
        while position > 0:
            size = min(CHUNK_SIZE, position)
            position -= size
            f.seek(position)
            buffer = f.read(size)
            if len(buffer) != size:
                raise TailReadError(
                    f"Short read at offset {position}: expected {size} bytes, got {len(buffer)}",
                    path=path,
                )
            for i in range(size - 1, -1, -1):
                if buffer[i] == _NEWLINE:
                    newlines += 1
                    if newlines == max_lines:
                        chunks.append(buffer[i + 1 :])
                        return b"".join(reversed(chunks)).decode(encoding, errors="replace")
            chunks.append(buffer)
    return b"".join(reversed(chunks)).decode(encoding, errors="replace")


class TailReader:
    """Async wrapper around read_last_lines; the scan runs in a worker thread."""

    def __init__(
        self,
        *,
        encoding: str = "utf-8",
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._encoding = encoding
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def read(self, path: str, max_lines: int) -> str:
        """Read the last max_lines lines of path. Errors propagate to the caller."""
        text = await asyncio.to_thread(read_last_lines, path, max_lines, self._encoding)
        self._logger.debug(
            "tail_reader_read",
            log_path=path,
            tail_max_lines=max_lines,
            tail_chars=len(text),
        )
        return text
