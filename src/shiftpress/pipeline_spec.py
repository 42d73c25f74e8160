"""Pipeline spec (v1) for shiftpress.

Goal: make a demo run reproducible (which layer, which LZ77 window, which
target rate) without a pile of CLI flags.

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shiftpress.core.lz77 import DEFAULT_WINDOW_SIZE
from shiftpress.layers.case_shift import SHIFT_IN, SHIFT_OUT

SPEC_ID_V1 = "shiftpress.pipeline.v1"

KNOWN_LAYERS = ("plain", "case_shift")


class PipelineSpecError(ValueError):
    pass


def _load_json_arg(pipeline_arg: str) -> dict[str, Any]:
    s = pipeline_arg.strip()
    if not s:
        raise PipelineSpecError("pipeline: argomento vuoto")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise PipelineSpecError(f"pipeline: file non trovato: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except Exception as e:
            raise PipelineSpecError(f"pipeline: JSON non valido in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise PipelineSpecError(f"pipeline: il JSON in {p} deve essere un oggetto")
        return obj

    try:
        obj = json.loads(s)
    except Exception as e:
        raise PipelineSpecError(f"pipeline: JSON inline non valido: {e}") from e
    if not isinstance(obj, dict):
        raise PipelineSpecError("pipeline: il JSON inline deve essere un oggetto")
    return obj


def _optional_positive_int(obj: dict[str, Any], key: str, default: int) -> int:
    if key not in obj:
        return default
    v = obj.get(key)
    # bool is an int subclass
    if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
        raise PipelineSpecError(f"pipeline: campo '{key}' deve essere un intero > 0")
    return v


def _optional_number(obj: dict[str, Any], key: str, default: float) -> float:
    if key not in obj:
        return default
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, (int, float)) or v <= 0:
        raise PipelineSpecError(f"pipeline: campo '{key}' deve essere un numero > 0")
    return float(v)


def _optional_markers(obj: dict[str, Any]) -> tuple[str, str]:
    if "markers" not in obj:
        return SHIFT_IN, SHIFT_OUT
    v = obj.get("markers")
    if not isinstance(v, list) or len(v) != 2:
        raise PipelineSpecError("pipeline: 'markers' deve essere una lista [shift_in, shift_out]")
    a, b = v
    if not isinstance(a, str) or not isinstance(b, str) or len(a) != 1 or len(b) != 1:
        raise PipelineSpecError("pipeline: ogni marker deve essere un singolo carattere")
    if a == b:
        raise PipelineSpecError("pipeline: i due marker devono essere diversi")
    return a, b


@dataclass(frozen=True)
class PipelineSpecV1:
    """A single demo plan."""

    name: str
    layer: str = "plain"
    window_size: int = DEFAULT_WINDOW_SIZE
    target_rate: float = 1.0
    shift_in: str = SHIFT_IN
    shift_out: str = SHIFT_OUT


def load_pipeline_spec(pipeline_arg: str) -> PipelineSpecV1:
    """Load and validate a pipeline spec.

    pipeline_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(pipeline_arg)

    allowed = {"spec", "name", "layer", "window_size", "target_rate", "markers"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise PipelineSpecError(f"pipeline: chiavi non supportate: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise PipelineSpecError(
            f"pipeline: spec non supportata: {spec_id!r} (attesa {SPEC_ID_V1!r})"
        )

    name = obj.get("name")
    if name is None:
        name = "pipeline"
    if not isinstance(name, str) or not name.strip():
        raise PipelineSpecError("pipeline: campo 'name' deve essere stringa")

    layer = obj.get("layer", "plain")
    if not isinstance(layer, str) or layer.strip() not in KNOWN_LAYERS:
        raise PipelineSpecError(
            f"pipeline: campo 'layer' deve essere uno di {', '.join(KNOWN_LAYERS)}"
        )

    window_size = _optional_positive_int(obj, "window_size", DEFAULT_WINDOW_SIZE)
    target_rate = _optional_number(obj, "target_rate", 1.0)
    shift_in, shift_out = _optional_markers(obj)

    return PipelineSpecV1(
        name=name.strip(),
        layer=layer.strip(),
        window_size=window_size,
        target_rate=target_rate,
        shift_in=shift_in,
        shift_out=shift_out,
    )
