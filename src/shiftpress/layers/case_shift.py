from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shiftpress.errors import UsageError

SHIFT_IN = "↑"  # ↑
SHIFT_OUT = "↓"  # ↓


def apply_shift(s: str, shift_in: str = SHIFT_IN, shift_out: str = SHIFT_OUT) -> str:
    """
    Replace uppercase runs with shift_in + lowercase payload (+ shift_out
    when a lowercase character ends the run).

    The markers must not occur in `s`; that is not checked here.
    """
    out: list[str] = []
    shifted = False
    for c in s:
        if c.isupper() and not shifted:
            shifted = True
            out.append(shift_in)
            out.append(c.lower())
        elif c.islower() and shifted:
            shifted = False
            out.append(shift_out)
            out.append(c)
        elif shifted:
            out.append(c.lower())
        else:
            out.append(c)
    return "".join(out)


def remove_shift(s: str, shift_in: str = SHIFT_IN, shift_out: str = SHIFT_OUT) -> str:
    out: list[str] = []
    shifted = False
    for c in s:
        if c == shift_in:
            shifted = True
        elif c == shift_out:
            shifted = False
        elif shifted:
            out.append(c.upper())
        else:
            out.append(c)
    return "".join(out)


@dataclass(frozen=True)
class LayerCaseShift:
    """
    Layer reversibile: riduce l'alfabeto prima dell'analisi delle frequenze.

    Round trip holds for inputs without the markers whose characters map
    one-to-one under lower()/upper() (plain ASCII always does).
    strict=True rejects inputs that already contain a marker.
    """

    shift_in: str = SHIFT_IN
    shift_out: str = SHIFT_OUT
    strict: bool = False
    id: str = "case_shift"

    def __post_init__(self) -> None:
        if len(self.shift_in) != 1 or len(self.shift_out) != 1:
            raise UsageError("case_shift: markers must be single characters")
        if self.shift_in == self.shift_out:
            raise UsageError("case_shift: shift-in and shift-out markers must differ")

    def encode(self, text: str) -> tuple[str, dict[str, Any]]:
        if self.strict:
            for marker in (self.shift_in, self.shift_out):
                pos = text.find(marker)
                if pos >= 0:
                    raise UsageError(f"case_shift: input contains reserved marker {marker!r} at {pos}")
        meta = {"shift_in": self.shift_in, "shift_out": self.shift_out}
        return apply_shift(text, self.shift_in, self.shift_out), meta

    def decode(self, symbols: str, layer_meta: dict[str, Any]) -> str:
        shift_in = layer_meta.get("shift_in", self.shift_in)
        shift_out = layer_meta.get("shift_out", self.shift_out)
        return remove_shift(symbols, shift_in, shift_out)
