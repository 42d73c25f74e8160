"""Stock byte compressors run over the same streams the Huffman path sees.

A layer's symbol stream (e.g. the case-shifted text) is UTF-8 encoded and
handed to zlib and zstd, so the report can show whether a layer also helps
a general-purpose compressor, not only the Huffman coder.
"""

from __future__ import annotations

import math
import zlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import zstandard as zstd

# stream id for data that went through no layer (LZ77 input)
RAW_STREAM = "raw"


def stream_bytes(symbols: str | bytes) -> bytes:
    if isinstance(symbols, (bytes, bytearray)):
        return bytes(symbols)
    return symbols.encode("utf-8")


class BaselineZlib:
    codec_id: str = "zlib"

    def __init__(self, level: int = 9):
        if not (0 <= level <= 9):
            raise ValueError(f"zlib level must be 0..9, got {level}")
        self.level = level

    def compressed_size(self, symbols: str | bytes) -> int:
        return len(zlib.compress(stream_bytes(symbols), self.level))


@dataclass
class BaselineZstd:
    """
    "tight" drops the optional frame fields (content size, checksum) so the
    size is closer to the bare compressed data.
    """

    level: int = 19
    tight: bool = True
    codec_id: str = "zstd"

    def compressed_size(self, symbols: str | bytes) -> int:
        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))
        return len(c.compress(stream_bytes(symbols)))


@dataclass(frozen=True)
class BaselineRow:
    stream_id: str
    codec_id: str
    input_bytes: int
    compressed_bytes: int

    @property
    def ratio(self) -> float:
        if self.input_bytes == 0:
            return 0.0
        return self.compressed_bytes / self.input_bytes


def huffman_row(stream_id: str, symbols: str | bytes, n_bits: int) -> BaselineRow:
    """Huffman bit count rounded up to whole bytes, for side-by-side listing."""
    return BaselineRow(
        stream_id=stream_id,
        codec_id="huffman",
        input_bytes=len(stream_bytes(symbols)),
        compressed_bytes=math.ceil(n_bits / 8),
    )


def compare_baselines(streams: Mapping[str, str | bytes], codecs: Mapping[str, Any]) -> list[BaselineRow]:
    rows: list[BaselineRow] = []
    for stream_id, symbols in streams.items():
        n = len(stream_bytes(symbols))
        for cid in sorted(codecs):
            rows.append(
                BaselineRow(
                    stream_id=stream_id,
                    codec_id=cid,
                    input_bytes=n,
                    compressed_bytes=codecs[cid].compressed_size(symbols),
                )
            )
    return rows
