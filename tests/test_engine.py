from __future__ import annotations

import pytest

from shiftpress.engine.pipeline import Engine
from shiftpress.errors import StructuralError, UsageError


@pytest.mark.parametrize("layer_id", ["plain", "case_shift"])
@pytest.mark.parametrize("text", ["abracadabra", "ABRACADABRA", "AbRaCaDaBrAAAAAbbbb", "aaaa", "Z"])
def test_huffman_roundtrip_through_layers(layer_id: str, text: str) -> None:
    engine = Engine.default()
    res = engine.huffman_compress(text, layer_id=layer_id)
    assert res.layer_id == layer_id
    assert engine.huffman_decompress(res) == text


def test_case_shift_shrinks_upper_case_stream() -> None:
    engine = Engine.default()
    plain = engine.huffman_compress("ABRACADABRA", layer_id="plain")
    shifted = engine.huffman_compress("ABRACADABRA", layer_id="case_shift")
    assert "↑" in shifted.table
    assert set(plain.table) == {"A", "B", "R", "C", "D"}
    assert set(shifted.table) == {"↑", "a", "b", "r", "c", "d"}


def test_unknown_layer_and_baseline() -> None:
    engine = Engine.default()
    with pytest.raises(UsageError):
        engine.huffman_compress("abc", layer_id="nope")
    with pytest.raises(UsageError):
        engine.baseline("lzma")


def test_empty_text_is_structural_error() -> None:
    with pytest.raises(StructuralError):
        Engine.default().huffman_compress("")


def test_lz77_path_is_independent() -> None:
    engine = Engine.default()
    data = "AbRaCaDaBrA abracadabra".encode("utf-8")
    tokens = engine.lz77(data, 64)
    assert engine.lz77_restore(tokens) == data


def test_apply_layer_matches_huffman_input() -> None:
    engine = Engine.default()
    symbols, meta = engine.apply_layer("ABRACADABRA", "case_shift")
    assert symbols == "↑abracadabra"
    assert meta == {"shift_in": "↑", "shift_out": "↓"}
    assert engine.huffman_compress("ABRACADABRA", "case_shift").n_symbols == len(symbols)


def test_layer_streams() -> None:
    streams = Engine.default().layer_streams("AbC")
    assert streams == {"plain": "AbC", "case_shift": "↑a↓b↑c"}


def test_baseline_rows_cover_every_layer_stream() -> None:
    text = "ABRACADABRA" * 20
    rows = Engine.default().baseline_rows(text)
    assert [(r.stream_id, r.codec_id) for r in rows] == [
        ("plain", "huffman"),
        ("plain", "zlib"),
        ("plain", "zstd"),
        ("case_shift", "huffman"),
        ("case_shift", "zlib"),
        ("case_shift", "zstd"),
    ]
    by_key = {(r.stream_id, r.codec_id): r for r in rows}
    assert by_key[("plain", "zlib")].input_bytes == 220
    # one 3-byte marker in front of the lowered text
    assert by_key[("case_shift", "zstd")].input_bytes == 223
    assert by_key[("plain", "huffman")].compressed_bytes == 58  # 20 * 23 bits
    assert all(0 < r.compressed_bytes < r.input_bytes for r in rows)


def test_baseline_rows_for_bytes_use_raw_stream() -> None:
    rows = Engine.default().baseline_rows(b"abracadabra" * 50)
    assert [(r.stream_id, r.codec_id) for r in rows] == [("raw", "zlib"), ("raw", "zstd")]
    assert all(0 < r.compressed_bytes < 550 for r in rows)
