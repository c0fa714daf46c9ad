"""Red-black view of a 2-3-4 process tree."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum

from rbsched.node import Node
from rbsched.process import Process
from rbsched.tree import ProcessTree


class Color(Enum):
    RED = "red"
    BLACK = "black"


@dataclass(eq=False)
class RedBlackNode:
    """A red-black tree node holding one process."""

    process: Process
    color: Color = Color.BLACK
    left: RedBlackNode | None = None
    right: RedBlackNode | None = None


def _cluster(node: Node) -> tuple[RedBlackNode, list[tuple[RedBlackNode, str]]]:
    """Turn one 2-3-4 node into a black node with red neighbours.

    Returns the black node and the empty child positions, left to right.
    """
    left_key, middle, right_key = node.keys
    top = RedBlackNode(middle)
    holes: list[tuple[RedBlackNode, str]] = []
    if left_key is not None:
        top.left = RedBlackNode(left_key, Color.RED)
        holes += [(top.left, "left"), (top.left, "right")]
    else:
        holes.append((top, "left"))
    if right_key is not None:
        top.right = RedBlackNode(right_key, Color.RED)
        holes += [(top.right, "left"), (top.right, "right")]
    else:
        holes.append((top, "right"))
    return top, holes


def build_red_black(tree: ProcessTree) -> RedBlackNode | None:
    """The red-black tree equivalent to ``tree``, or None when it is empty."""
    if tree.is_empty():
        return None
    root, holes = _cluster(tree.root)
    pending = deque(holes)
    queue = deque(child for child in tree.root.children if child is not None)
    while queue:
        node = queue.popleft()
        queue.extend(child for child in node.children if child is not None)
        parent, side = pending.popleft()
        subtree, sub_holes = _cluster(node)
        setattr(parent, side, subtree)
        pending.extend(sub_holes)
    return root