from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from shiftpress.core.code_table import build_code_table, reverse_code_table
from shiftpress.core.codec_base import Codec
from shiftpress.core.freq import FrequencyEntry, build_freq_table
from shiftpress.core.huffman_tree import HuffmanTree, build_huffman_tree
from shiftpress.errors import DecodeDesyncError, EncodingGapError


def encode_symbols(symbols: Iterable[str], table: dict[str, str]) -> str:
    """
    symbols -> bit stream ("0"/"1" characters, no packing, no framing).

    A symbol absent from the table is an error, never silently dropped.
    """
    out: list[str] = []
    for i, s in enumerate(symbols):
        code = table.get(s)
        if code is None:
            raise EncodingGapError(f"symbol {s!r} at position {i} is not in the code table")
        out.append(code)
    return "".join(out)


def decode_bits(bits: str, table: dict[str, str]) -> str:
    """
    Decodifica il bit stream con la tabella inversa.

    Bits accumulate in a buffer until it equals a code; then the symbol is
    emitted and the buffer cleared. Relies on the table being prefix-free.
    """
    if not bits:
        return ""
    if not table:
        raise DecodeDesyncError("cannot decode a non-empty stream with an empty code table")

    reversed_table = reverse_code_table(table)
    max_len = max(len(c) for c in reversed_table)

    out: list[str] = []
    buf = ""
    for pos, bit in enumerate(bits):
        if bit != "0" and bit != "1":
            raise DecodeDesyncError(f"invalid bit {bit!r} at offset {pos}")
        buf += bit
        sym = reversed_table.get(buf)
        if sym is not None:
            out.append(sym)
            buf = ""
        elif len(buf) >= max_len:
            raise DecodeDesyncError(f"no code matches {buf!r} (ending at offset {pos})")

    if buf:
        raise DecodeDesyncError(f"stream ends with unmatched bits {buf!r}")
    return "".join(out)


@dataclass(frozen=True)
class HuffmanResult:
    layer_id: str
    freq: list[FrequencyEntry]
    tree: HuffmanTree
    table: dict[str, str]
    bits: str
    n_symbols: int
    layer_meta: dict[str, Any] = field(default_factory=dict)


class CodecHuffman(Codec):
    codec_id = "huffman"

    def compress(
        self,
        symbols: str,
        layer_id: str = "plain",
        layer_meta: dict[str, Any] | None = None,
    ) -> HuffmanResult:
        freq = build_freq_table(symbols)
        tree = build_huffman_tree(freq)
        table = build_code_table(tree)
        bits = encode_symbols(symbols, table)
        return HuffmanResult(
            layer_id=layer_id,
            freq=freq,
            tree=tree,
            table=table,
            bits=bits,
            n_symbols=len(symbols),
            layer_meta=dict(layer_meta or {}),
        )

    def decompress(self, encoded: HuffmanResult) -> str:
        text = decode_bits(encoded.bits, encoded.table)
        if len(text) != encoded.n_symbols:
            raise DecodeDesyncError(
                f"huffman: attesi {encoded.n_symbols} simboli, decodificati {len(text)}"
            )
        return text
