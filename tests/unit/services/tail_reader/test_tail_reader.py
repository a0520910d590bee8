# -*- coding: utf-8 -*-
"""Unit tests for read_last_lines and TailReader."""

from __future__ import annotations

from pathlib import Path

import pytest

from stacked_deck_tracker.services.tail_reader import CHUNK_SIZE, TailReader, read_last_lines


def _write(tmp_path: Path, data: bytes) -> str:
    path = tmp_path / "Client.txt"
    path.write_bytes(data)
    return str(path)


def test_empty_file_returns_empty_string(tmp_path: Path) -> None:
    assert read_last_lines(_write(tmp_path, b""), 5) == ""


def test_only_newlines_returns_text_after_nth_newline(tmp_path: Path) -> None:
    assert read_last_lines(_write(tmp_path, b"\n\n\n\n\n"), 2) == "\n"


def test_trailing_newline_counts_as_one(tmp_path: Path) -> None:
    path = _write(tmp_path, b"a\nb\nc\n")

    assert read_last_lines(path, 1) == ""
    assert read_last_lines(path, 2) == "c\n"
    assert read_last_lines(path, 3) == "b\nc\n"


def test_fewer_newlines_than_requested_returns_whole_file(tmp_path: Path) -> None:
    path = _write(tmp_path, b"first\nsecond\nthird")

    assert read_last_lines(path, 10) == "first\nsecond\nthird"


def test_result_is_suffix_after_nth_newline_from_end(tmp_path: Path) -> None:
    content = "".join(f"line {i}\n" for i in range(100)) + "partial"
    path = _write(tmp_path, content.encode())

    for n in (1, 2, 7, 50, 100):
        idx = len(content)
        for _ in range(n):
            idx = content.rfind("\n", 0, idx)
        expected = content[idx + 1 :]
        assert read_last_lines(path, n) == expected


def test_carriage_returns_are_preserved(tmp_path: Path) -> None:
    path = _write(tmp_path, b"one\r\ntwo\r\nthree\r\n")

    assert read_last_lines(path, 3) == "two\r\nthree\r\n"


def test_line_longer_than_chunk_spans_chunks(tmp_path: Path) -> None:
    long_line = "x" * (CHUNK_SIZE * 3 + 17)
    path = _write(tmp_path, f"head\n{long_line}\ntail\n".encode())

    assert read_last_lines(path, 3) == f"{long_line}\ntail\n"


def test_newline_on_chunk_boundary(tmp_path: Path) -> None:
    first = "a" * (CHUNK_SIZE - 1)
    second = "b" * (CHUNK_SIZE - 1)
    path = _write(tmp_path, f"{first}\n{second}\n".encode())

    assert read_last_lines(path, 2) == f"{second}\n"


@pytest.mark.parametrize("max_lines", [0, -1])
def test_non_positive_max_lines_returns_empty_without_opening(tmp_path: Path, max_lines: int) -> None:
    missing = str(tmp_path / "does-not-exist.txt")

    assert read_last_lines(missing, max_lines) == ""


def test_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_last_lines(str(tmp_path / "missing.txt"), 3)


def test_invalid_utf8_is_replaced(tmp_path: Path) -> None:
    path = _write(tmp_path, b"ok\n\xff\xfe bad\n")

    text = read_last_lines(path, 2)

    assert text.endswith(" bad\n")
    assert "�" in text


async def test_tail_reader_reads_in_worker_thread(tmp_path: Path) -> None:
    path = _write(tmp_path, b"a\nb\nc\n")
    reader = TailReader()

    assert await reader.read(path, 2) == "c\n"
