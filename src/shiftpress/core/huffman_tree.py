from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union

from shiftpress.core.freq import FrequencyEntry
from shiftpress.errors import StructuralError


# -------------------
# Strutture di base Huffman
# -------------------
@dataclass(frozen=True)
class HuffmanLeaf:
    freq: int
    symbol: str


@dataclass(frozen=True)
class HuffmanNode:
    freq: int
    left: "HuffmanTree"
    right: "HuffmanTree"


HuffmanTree = Union[HuffmanLeaf, HuffmanNode]


def build_huffman_tree(entries: Iterable[FrequencyEntry]) -> HuffmanTree:
    """
    Min-heap of (freq, seq, tree). `seq` is the insertion counter, so equal
    frequencies pop in insertion order and the result is deterministic.

    A single entry comes back as a bare leaf (no internal node).
    """
    heap: list[tuple[int, int, HuffmanTree]] = []
    counter = itertools.count()

    for e in entries:
        if e.count < 1:
            raise StructuralError(f"frequency for {e.symbol!r} must be >= 1, got {e.count}")
        heap.append((e.count, next(counter), HuffmanLeaf(freq=e.count, symbol=e.symbol)))

    if not heap:
        raise StructuralError("cannot build a Huffman tree from an empty frequency table")

    heapq.heapify(heap)

    while len(heap) > 1:
        f1, _, a = heapq.heappop(heap)
        f2, _, b = heapq.heappop(heap)
        parent = HuffmanNode(freq=f1 + f2, left=a, right=b)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]


def _walk(tree: HuffmanTree) -> Iterator[tuple[HuffmanTree, int]]:
    """Pre-order (node, depth), left before right. Explicit stack, no recursion."""
    stack: list[tuple[HuffmanTree, int]] = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        if isinstance(node, HuffmanNode):
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))


def iter_leaves(tree: HuffmanTree) -> Iterator[HuffmanLeaf]:
    for node, _ in _walk(tree):
        if isinstance(node, HuffmanLeaf):
            yield node


def count_leaves(tree: HuffmanTree) -> int:
    return sum(1 for _ in iter_leaves(tree))


def leaf_depths(tree: HuffmanTree) -> dict[str, int]:
    return {node.symbol: depth for node, depth in _walk(tree) if isinstance(node, HuffmanLeaf)}


def tree_depth(tree: HuffmanTree) -> int:
    """Max leaf depth; 0 for a lone leaf."""
    return max(depth for _, depth in _walk(tree))
