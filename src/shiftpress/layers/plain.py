from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LayerPlain:
    """
    Layer identità.
    - symbols: the input text, unchanged
    - layer_meta: empty
    """

    id: str = "plain"

    def encode(self, text: str) -> tuple[str, dict[str, Any]]:
        return text, {}

    def decode(self, symbols: str, layer_meta: dict[str, Any]) -> str:
        return symbols
