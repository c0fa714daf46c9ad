"""Text renderings of a process tree, as a 2-3-4 tree and as a red-black tree."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from rbsched.redblack import Color, RedBlackNode, build_red_black
from rbsched.tree import ProcessTree

_SEPARATOR = "\n" + "-" * 120 + "\n"
_NODE_WIDTH = 12


def _level_spacing(width: int, child_count: int) -> int:
    # Truncating division, as the layout was designed with it.
    return max(1, int((width - _NODE_WIDTH * child_count) / (child_count + 1)))


def render_234(tree: ProcessTree, width: int = 120) -> str:
    """The tree drawn level by level as 2-3-4 nodes, ``width`` columns wide."""
    parts = ["\n"]
    spaces = (width - _NODE_WIDTH) // 2
    parts.append(" " * spaces)

    if tree.is_empty():
        parts.append("Tree is empty.\n")
        return "".join(parts)

    level = deque([tree.root])
    while level:
        child_count = 0
        next_level = deque()
        for node in level:
            parts.append(str(node))
            next_level.extend(child for child in node.children if child is not None)
            parts.append(" " * spaces)
            child_count += node.children_count()
        parts.append("\n\n")
        spaces = _level_spacing(width, child_count)
        parts.append(" " * spaces)
        level = next_level

    parts.append(_SEPARATOR)
    return "".join(parts)


def _reverse_inorder(node: RedBlackNode | None, depth: int = 0) -> Iterator[tuple[RedBlackNode, int]]:
    if node is None:
        return
    yield from _reverse_inorder(node.right, depth + 1)
    yield node, depth
    yield from _reverse_inorder(node.left, depth + 1)


def render_red_black(tree: ProcessTree) -> str:
    """The tree drawn sideways as a red-black tree; black nodes are in parentheses."""
    root = build_red_black(tree)
    if root is None:
        return "\t\t\tTree is empty\n"

    lines = []
    for node, depth in _reverse_inorder(root):
        indent = "\t" * depth
        if node.color is Color.BLACK:
            lines.append(f"{indent}({node.process})\n")
        else:
            lines.append(f"{indent} {node.process} \n")
    return "".join(lines) + _SEPARATOR