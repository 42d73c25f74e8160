from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class FrequencyEntry:
    symbol: str
    count: int


def build_freq_table(symbols: Iterable[str]) -> list[FrequencyEntry]:
    """
    Conta le occorrenze di ogni simbolo.

    One entry per distinct symbol, in first-occurrence order.
    Empty input -> empty list.
    """
    counts: dict[str, int] = {}
    for s in symbols:
        counts[s] = counts.get(s, 0) + 1
    return [FrequencyEntry(symbol=s, count=c) for s, c in counts.items()]


def total_count(entries: Iterable[FrequencyEntry]) -> int:
    return sum(e.count for e in entries)
