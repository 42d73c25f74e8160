"""Huffman tree display: pyecharts tree chart, standalone HTML, plain text.

Reads the tree only. A lone leaf (single-symbol input) renders as a
one-node chart.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pyecharts import options as opts
from pyecharts.charts import Tree

from shiftpress.core.huffman_tree import HuffmanLeaf, HuffmanNode, HuffmanTree, tree_depth


def _label(node: HuffmanTree) -> str:
    if isinstance(node, HuffmanLeaf):
        return f"{node.symbol}:{node.freq}"
    return f"{node.freq}"


def tree_to_chart_data(tree: HuffmanTree) -> dict[str, Any]:
    root: dict[str, Any] = {"name": _label(tree), "value": tree.freq}
    stack: list[tuple[HuffmanTree, dict[str, Any]]] = [(tree, root)]
    while stack:
        node, item = stack.pop()
        if isinstance(node, HuffmanNode):
            children = []
            for child in (node.left, node.right):
                c = {"name": _label(child), "value": child.freq}
                children.append(c)
                stack.append((child, c))
            item["children"] = children
    return root


def render_tree_text(tree: HuffmanTree) -> str:
    """
    11
      0 ── a:5
      1 ── 6
        0 ── ...
    """
    lines = [_label(tree)]
    stack: list[tuple[HuffmanTree, int, str]] = []
    if isinstance(tree, HuffmanNode):
        stack = [(tree.right, 1, "1"), (tree.left, 1, "0")]
    while stack:
        node, depth, bit = stack.pop()
        lines.append(f"{'  ' * depth}{bit} ── {_label(node)}")
        if isinstance(node, HuffmanNode):
            stack.append((node.right, depth + 1, "1"))
            stack.append((node.left, depth + 1, "0"))
    return "\n".join(lines)


def build_tree_chart(tree: HuffmanTree, title: str = "Huffman Tree") -> Tree:
    """Top-down tree, fully expanded (initial depth = max leaf depth)."""
    return (
        Tree(init_opts=opts.InitOpts(width="1200px", height="800px", page_title=title))
        .add(
            series_name="tree",
            data=[tree_to_chart_data(tree)],
            orient="TB",
            initial_tree_depth=tree_depth(tree),
            label_opts=opts.LabelOpts(position="top"),
            leaves_opts=opts.TreeLeavesOpts(label_opts=opts.LabelOpts(position="bottom")),
        )
        .set_global_opts(
            title_opts=opts.TitleOpts(title=title),
            tooltip_opts=opts.TooltipOpts(trigger="item"),
        )
    )


def render_tree_html(tree: HuffmanTree, title: str = "Huffman Tree") -> str:
    return build_tree_chart(tree, title).render_embed()


def write_tree_html(tree: HuffmanTree, path: Path, title: str = "Huffman Tree") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_tree_chart(tree, title).render(str(path))
    return path
