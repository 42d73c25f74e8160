from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from shiftpress.errors import CorruptPayload, WindowBoundsError

# distance + length + next literal
TOKEN_SIZE = 3

DEFAULT_WINDOW_SIZE = 4096


@dataclass(frozen=True)
class LZ77Token:
    distance: int
    length: int
    next: int | None  # None only at end of input


def longest_match(data: bytes, cursor: int, window_size: int) -> tuple[int, int]:
    """
    Naive search of the window behind `cursor`. Returns (length, distance).

    Candidates are scanned nearest first and only a strictly longer match
    replaces the best one, so equal lengths keep the smallest distance.
    A match stays inside the already-seen data (length <= distance), is
    shorter than the window and never runs past the end of input.
    """
    if window_size <= 0:
        raise WindowBoundsError(f"window_size must be > 0, got {window_size}")

    n = len(data)
    best_len = 0
    best_dist = 0
    max_len = min(window_size - 1, n - cursor)
    start = max(0, cursor - window_size)
    for i in range(cursor - 1, start - 1, -1):
        limit = min(cursor - i, max_len)
        if limit <= best_len:
            continue
        ln = 0
        while ln < limit and data[i + ln] == data[cursor + ln]:
            ln += 1
        if ln > best_len:
            best_len = ln
            best_dist = cursor - i
    return best_len, best_dist


def lz77_compress(data: bytes, window_size: int = DEFAULT_WINDOW_SIZE) -> list[LZ77Token]:
    if window_size <= 0:
        raise WindowBoundsError(f"window_size must be > 0, got {window_size}")

    data = bytes(data)
    n = len(data)
    tokens: list[LZ77Token] = []
    i = 0
    while i < n:
        length, distance = longest_match(data, i, window_size)
        nxt = data[i + length] if i + length < n else None
        tokens.append(LZ77Token(distance=distance, length=length, next=nxt))
        i += length + 1
    return tokens


def lz77_decompress(tokens: list[LZ77Token]) -> bytes:
    out = bytearray()
    for k, t in enumerate(tokens):
        if t.length > 0:
            if t.distance <= 0 or t.distance > len(out):
                raise CorruptPayload(
                    f"lz77: token {k} points {t.distance} bytes back, only {len(out)} available"
                )
            start = len(out) - t.distance
            # byte per byte: also valid if a producer emits overlapping matches
            for j in range(t.length):
                out.append(out[start + j])
        if t.next is not None:
            out.append(t.next)
    return bytes(out)


def compression_ratio(tokens: list[LZ77Token], original_len: int) -> float:
    """(tokens * TOKEN_SIZE) / original bytes; 0.0 for empty input."""
    if original_len <= 0:
        return 0.0
    return (len(tokens) * TOKEN_SIZE) / original_len


def compare_rate(rate: float, target: float) -> Literal["less", "equal", "greater"]:
    if rate < target:
        return "less"
    if rate == target:
        return "equal"
    return "greater"
