from __future__ import annotations

from collections.abc import Iterable

from shiftpress.core.huffman_tree import HuffmanLeaf, HuffmanNode, HuffmanTree
from shiftpress.errors import DecodeDesyncError

# Code for the only symbol of a one-leaf tree (no path to walk).
SINGLE_SYMBOL_CODE = "0"


def build_code_table(root: HuffmanTree) -> dict[str, str]:
    """
    symbol -> bitstring ("0"/"1").

    Left edge appends "0", right edge appends "1". The prefix travels with
    each stack entry, so skewed trees do not grow the Python stack.
    """
    if isinstance(root, HuffmanLeaf):
        return {root.symbol: SINGLE_SYMBOL_CODE}

    codes: dict[str, str] = {}
    stack: list[tuple[HuffmanTree, str]] = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if isinstance(node, HuffmanLeaf):
            codes[node.symbol] = prefix
        elif isinstance(node, HuffmanNode):
            stack.append((node.right, prefix + "1"))
            stack.append((node.left, prefix + "0"))
        else:
            raise TypeError(f"unexpected tree node: {type(node).__name__}")
    return codes


def reverse_code_table(table: dict[str, str]) -> dict[str, str]:
    rev: dict[str, str] = {}
    for sym, code in table.items():
        if code in rev:
            raise DecodeDesyncError(f"codice duplicato {code!r} per {rev[code]!r} e {sym!r}")
        rev[code] = sym
    return rev


def is_prefix_free(codes: Iterable[str]) -> bool:
    # after sorting, a prefix always sits right before one of its extensions
    ordered = sorted(codes)
    for a, b in zip(ordered, ordered[1:]):
        if b.startswith(a):
            return False
    return True
