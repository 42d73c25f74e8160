"""Compression statistics and bit dumps for the CLI.

Nothing here prints; every render_* helper returns lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from shiftpress.core.baselines import BaselineRow
from shiftpress.core.codec_huffman import HuffmanResult
from shiftpress.core.huffman_tree import tree_depth
from shiftpress.core.lz77 import TOKEN_SIZE, LZ77Token, compare_rate


def ascii_bits(text: str) -> str:
    """One %08b group per character (wider for code points above 255)."""
    return " ".join(f"{ord(c):08b}" for c in text)


def raw_bits(text: str) -> int:
    return len(text.encode("utf-8")) * 8


def group_bits(bits: str, width: int = 8) -> str:
    if width <= 0:
        raise ValueError(f"width must be > 0, got {width}")
    return " ".join(bits[i:i + width] for i in range(0, len(bits), width))


@dataclass(frozen=True)
class HuffmanStats:
    original_bits: int
    encoded_bits: int
    distinct_symbols: int
    tree_depth: int

    @property
    def ratio(self) -> float:
        # 1.0 = nessuna compressione
        if self.original_bits == 0:
            return 0.0
        return self.encoded_bits / self.original_bits


def huffman_stats(text: str, result: HuffmanResult) -> HuffmanStats:
    return HuffmanStats(
        original_bits=raw_bits(text),
        encoded_bits=len(result.bits),
        distinct_symbols=len(result.table),
        tree_depth=tree_depth(result.tree),
    )


@dataclass(frozen=True)
class LZ77Stats:
    original_bytes: int
    token_count: int
    target_rate: float

    @property
    def compressed_bytes(self) -> int:
        return self.token_count * TOKEN_SIZE

    @property
    def ratio(self) -> float:
        if self.original_bytes == 0:
            return 0.0
        return self.compressed_bytes / self.original_bytes

    @property
    def verdict(self) -> str:
        return compare_rate(self.ratio, self.target_rate)


def lz77_stats(data: bytes, tokens: list[LZ77Token], target_rate: float = 1.0) -> LZ77Stats:
    return LZ77Stats(original_bytes=len(data), token_count=len(tokens), target_rate=target_rate)


_VERDICT_TEXT = {"less": "less than", "equal": "equal to", "greater": "greater than"}


def render_code_table(table: dict[str, str]) -> list[str]:
    rows = sorted(table.items(), key=lambda kv: (len(kv[1]), kv[1]))
    return [f"  {sym!r:>8} -> {code}" for sym, code in rows]


def render_huffman_stats(label: str, stats: HuffmanStats) -> list[str]:
    return [
        f"=== Huffman: {label} ===",
        f"Simboli distinti : {stats.distinct_symbols}",
        f"Profondita' max  : {stats.tree_depth}",
        f"Originale        : {stats.original_bits} bit",
        f"Codificato       : {stats.encoded_bits} bit",
        f"Rapporto         : {stats.ratio:.3f} (1.0 = nessuna compressione)",
    ]


def render_lz77_stats(label: str, stats: LZ77Stats) -> list[str]:
    return [
        f"=== LZ77: {label} ===",
        f"Original size    : {stats.original_bytes} bytes",
        f"Tokens           : {stats.token_count}",
        f"Compressed size  : {stats.compressed_bytes} bytes",
        f"Compression rate : {stats.ratio:.2f}",
        f"Compression rate is {_VERDICT_TEXT[stats.verdict]} the target rate ({stats.target_rate:.2f}).",
    ]


def render_baselines(rows: list[BaselineRow]) -> list[str]:
    lines = ["Baselines:"]
    for r in rows:
        lines.append(
            f"  {r.stream_id:<10} {r.codec_id:<7} {r.input_bytes:>7} -> {r.compressed_bytes:>7} bytes"
            f" (ratio {r.ratio:.3f})"
        )
    return lines
