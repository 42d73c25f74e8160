from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from shiftpress.core.baselines import (
    RAW_STREAM,
    BaselineRow,
    BaselineZlib,
    BaselineZstd,
    compare_baselines,
    huffman_row,
)
from shiftpress.core.codec_huffman import CodecHuffman, HuffmanResult
from shiftpress.core.lz77 import DEFAULT_WINDOW_SIZE, LZ77Token, lz77_compress, lz77_decompress
from shiftpress.errors import UsageError
from shiftpress.layers.case_shift import LayerCaseShift
from shiftpress.layers.plain import LayerPlain


# -------------------
# Engine
# -------------------
@dataclass
class Engine:
    """
    Huffman path: text -> layer.encode -> freq -> tree -> table -> bits.
    LZ77 path: raw bytes -> tokens, independent of the Huffman path.
    Baselines are stock byte compressors run over the same layer streams,
    used only to compare sizes.
    """

    layers: Dict[str, Any]
    baselines: Dict[str, Any]
    huffman: CodecHuffman

    @classmethod
    def default(cls) -> "Engine":
        layers = {
            "plain": LayerPlain(),
            "case_shift": LayerCaseShift(),
        }
        baselines = {
            "zlib": BaselineZlib(level=9),
            "zstd": BaselineZstd(level=19, tight=True),
        }
        return cls(layers=layers, baselines=baselines, huffman=CodecHuffman())

    def layer(self, layer_id: str) -> Any:
        if layer_id not in self.layers:
            raise UsageError(f"Layer non supportato: {layer_id}")
        return self.layers[layer_id]

    def baseline(self, codec_id: str) -> Any:
        if codec_id not in self.baselines:
            raise UsageError(f"Codec non supportato: {codec_id}")
        return self.baselines[codec_id]

    def apply_layer(self, text: str, layer_id: str = "plain") -> tuple[str, dict[str, Any]]:
        return self.layer(layer_id).encode(text)

    def huffman_compress(self, text: str, layer_id: str = "plain") -> HuffmanResult:
        symbols, meta = self.apply_layer(text, layer_id)
        return self.huffman.compress(symbols, layer_id=layer_id, layer_meta=meta)

    def huffman_decompress(self, result: HuffmanResult) -> str:
        layer = self.layer(result.layer_id)
        symbols = self.huffman.decompress(result)
        return layer.decode(symbols, result.layer_meta)

    def lz77(self, data: bytes, window_size: int = DEFAULT_WINDOW_SIZE) -> list[LZ77Token]:
        return lz77_compress(data, window_size)

    def lz77_restore(self, tokens: list[LZ77Token]) -> bytes:
        return lz77_decompress(tokens)

    def layer_streams(self, text: str) -> dict[str, str]:
        """layer id -> symbol stream, in registration order."""
        return {lid: self.apply_layer(text, lid)[0] for lid in self.layers}

    def baseline_rows(self, data: str | bytes) -> list[BaselineRow]:
        """
        Text: every layer stream goes through every baseline codec, next to
        the Huffman size of the same stream. Bytes: a single "raw" stream.
        """
        if isinstance(data, (bytes, bytearray)):
            return compare_baselines({RAW_STREAM: bytes(data)}, self.baselines)

        rows: list[BaselineRow] = []
        for lid, symbols in self.layer_streams(data).items():
            if symbols:
                res = self.huffman.compress(symbols, layer_id=lid)
                rows.append(huffman_row(lid, symbols, len(res.bits)))
            rows.extend(compare_baselines({lid: symbols}, self.baselines))
        return rows
