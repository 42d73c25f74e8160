"""shiftpress CLI.

This is the console-script entrypoint (``shiftpress``). It only sequences
library calls and prints results; all codec logic lives under core/,
layers/ and engine/.
"""

from __future__ import annotations

import argparse
import html
import sys
from pathlib import Path

from shiftpress.core.huffman_tree import HuffmanTree
from shiftpress.core.lz77 import DEFAULT_WINDOW_SIZE
from shiftpress.engine.pipeline import Engine
from shiftpress.errors import CorruptPayload, ShiftpressError, render_exit_codes_markdown
from shiftpress.layers.case_shift import LayerCaseShift
from shiftpress.pipeline_spec import PipelineSpecError, PipelineSpecV1, load_pipeline_spec
from shiftpress.report import (
    ascii_bits,
    group_bits,
    huffman_stats,
    lz77_stats,
    raw_bits,
    render_baselines,
    render_code_table,
    render_huffman_stats,
    render_lz77_stats,
)
from shiftpress.viz.tree_chart import render_tree_text, write_tree_html

DEMO_SAMPLES: tuple[tuple[str, str], ...] = (
    ("upper", "ABRACADABRA"),
    ("lower", "abracadabra"),
    ("mixed", "AbRaCaDaBrAAAAAbbbb"),
)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _engine_for(spec: PipelineSpecV1 | None) -> Engine:
    engine = Engine.default()
    if spec is not None:
        engine.layers["case_shift"] = LayerCaseShift(shift_in=spec.shift_in, shift_out=spec.shift_out)
    return engine


def _emit(lines: list[str]) -> None:
    for ln in lines:
        print(ln)


def _maybe_write_tree(tree: HuffmanTree, tree_dir: Path | None, label: str) -> None:
    if tree_dir is None:
        return
    out = write_tree_html(tree, tree_dir / f"huffman_{label}_tree.html", title=f"Huffman Tree ({label})")
    print(f"Tree chart     : {out}")


def _demo(tree_dir: Path | None) -> int:
    engine = Engine.default()

    for label, text in DEMO_SAMPLES:
        print(f"{label}: {text}")
        print(f"Bits: {ascii_bits(text)}")
        print(f"Memory used: {raw_bits(text)} bits")

        for layer_id in ("plain", "case_shift"):
            tag = label if layer_id == "plain" else f"{label}_shifted"
            symbols, meta = engine.apply_layer(text, layer_id)
            if layer_id == "case_shift":
                print(f"{tag}: {symbols}")
            result = engine.huffman.compress(symbols, layer_id=layer_id, layer_meta=meta)
            print(f"{tag} encoding:")
            _emit(render_code_table(result.table))
            print(f"{tag} encoded: {group_bits(result.bits)}")
            print(f"Memory used: {len(result.bits)} bits")
            decoded = engine.huffman_decompress(result)
            print(f"{tag} decoded: {decoded}")
            if decoded != text:
                raise CorruptPayload(f"demo: round trip mismatch for {tag}")
            _maybe_write_tree(result.tree, tree_dir, tag)
        print("~" * 72)

    return 0


def _read_text(input_path: Path, unescape_html: bool) -> str:
    text = input_path.read_text(encoding="utf-8")
    return html.unescape(text) if unescape_html else text


def _huffman_file(
    input_path: Path,
    *,
    layer_id: str | None,
    pipeline_arg: str | None,
    unescape_html: bool,
    tree_html: Path | None,
    show_bits: bool,
    show_tree: bool,
    baselines: bool,
) -> int:
    spec = load_pipeline_spec(pipeline_arg) if pipeline_arg else None
    engine = _engine_for(spec)
    # precedence: CLI --layer > spec.layer > plain
    layer = layer_id or (spec.layer if spec else "plain")

    text = _read_text(input_path, unescape_html)
    result = engine.huffman_compress(text, layer_id=layer)
    decoded = engine.huffman_decompress(result)
    if decoded != text:
        raise CorruptPayload(f"huffman: round trip mismatch for {input_path}")

    _emit(render_huffman_stats(f"{input_path.name} [{layer}]", huffman_stats(text, result)))
    if show_tree:
        print(render_tree_text(result.tree))
    if show_bits:
        print(group_bits(result.bits))
    if baselines:
        _emit(render_baselines(engine.baseline_rows(text)))
    if tree_html is not None:
        out = write_tree_html(result.tree, tree_html, title=f"Huffman Tree ({input_path.name})")
        print(f"Tree chart       : {out}")
    print("Round trip       : OK")
    return 0


def _lz77_file(
    input_path: Path,
    *,
    window: int | None,
    target: float | None,
    pipeline_arg: str | None,
    baselines: bool,
) -> int:
    spec = load_pipeline_spec(pipeline_arg) if pipeline_arg else None
    engine = _engine_for(spec)
    window_size = window if window is not None else (spec.window_size if spec else DEFAULT_WINDOW_SIZE)
    target_rate = target if target is not None else (spec.target_rate if spec else 1.0)

    data = input_path.read_bytes()
    tokens = engine.lz77(data, window_size)
    if engine.lz77_restore(tokens) != data:
        raise CorruptPayload(f"lz77: reconstruction mismatch for {input_path}")

    _emit(render_lz77_stats(f"{input_path.name} [window={window_size}]", lz77_stats(data, tokens, target_rate)))
    if baselines:
        _emit(render_baselines(engine.baseline_rows(data)))
    print("Reconstruction   : OK")
    return 0


def _exit_codes(output: Path | None) -> int:
    md = render_exit_codes_markdown()
    if output is None:
        sys.stdout.write(md)
        return 0
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(md, encoding="utf-8")
    print(f"[shiftpress] wrote {output}")
    return 0


def _pipeline_validate(pipeline_arg: str) -> int:
    # load is the validation
    load_pipeline_spec(pipeline_arg)
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shiftpress", description="Huffman + case-shift and LZ77 text compression demo"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_demo = sub.add_parser("demo", help="Run the built-in abracadabra demonstration")
    p_demo.add_argument(
        "--tree-dir", type=Path, default=None, help="Write one HTML tree chart per sample here"
    )
    _add_common_args(p_demo)

    p_h = sub.add_parser("huffman", help="Huffman-code a UTF-8 text file and verify the round trip")
    p_h.add_argument("input", type=Path)
    p_h.add_argument(
        "--layer",
        choices=["plain", "case_shift"],
        default=None,
        help="Preprocessing layer (default: spec.layer or plain)",
    )
    p_h.add_argument(
        "--pipeline",
        default=None,
        help="Pipeline spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_h.add_argument("--unescape-html", action="store_true", help="Decode HTML entities first")
    p_h.add_argument("--tree-html", type=Path, default=None, help="Write the tree as an HTML chart")
    p_h.add_argument("--show-tree", action="store_true", help="Print the tree as text")
    p_h.add_argument("--show-bits", action="store_true", help="Print the encoded bit stream")
    p_h.add_argument("--baselines", action="store_true", help="Compare every layer stream with zlib/zstd")
    _add_common_args(p_h)

    p_l = sub.add_parser("lz77", help="LZ77-tokenise a file and verify reconstruction")
    p_l.add_argument("input", type=Path)
    p_l.add_argument(
        "--window",
        type=int,
        default=None,
        help=f"Sliding window size in bytes (default: spec.window_size or {DEFAULT_WINDOW_SIZE})",
    )
    p_l.add_argument(
        "--target", type=float, default=None, help="Target compression rate (default: 1.0)"
    )
    p_l.add_argument(
        "--pipeline",
        default=None,
        help="Pipeline spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_l.add_argument("--baselines", action="store_true", help="Compare with zlib/zstd sizes")
    _add_common_args(p_l)

    p_v = sub.add_parser("pipeline-validate", help="Validate a pipeline spec (v1)")
    p_v.add_argument("pipeline", help="Pipeline spec JSON (@file.json or inline JSON)")
    _add_common_args(p_v)

    p_x = sub.add_parser("exit-codes", help="Print the exit code table as markdown")
    p_x.add_argument("--output", type=Path, default=None, help="Write to this file instead of stdout")
    _add_common_args(p_x)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "demo":
            return _demo(ns.tree_dir)
        if ns.cmd == "huffman":
            return _huffman_file(
                ns.input,
                layer_id=ns.layer,
                pipeline_arg=ns.pipeline,
                unescape_html=bool(ns.unescape_html),
                tree_html=ns.tree_html,
                show_bits=bool(ns.show_bits),
                show_tree=bool(ns.show_tree),
                baselines=bool(ns.baselines),
            )
        if ns.cmd == "lz77":
            return _lz77_file(
                ns.input,
                window=ns.window,
                target=ns.target,
                pipeline_arg=ns.pipeline,
                baselines=bool(ns.baselines),
            )
        if ns.cmd == "pipeline-validate":
            return _pipeline_validate(str(ns.pipeline))
        if ns.cmd == "exit-codes":
            return _exit_codes(ns.output)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except PipelineSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[shiftpress] {e}", file=sys.stderr)
        return 2
    except ShiftpressError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[shiftpress] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", 10) or 10)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[shiftpress] error: {e}", file=sys.stderr)
        return 10


if __name__ == "__main__":
    raise SystemExit(main())
