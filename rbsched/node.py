"""A single node of a 2-3-4 tree holding up to three processes."""

from __future__ import annotations

from rbsched.process import Process


class Node:
    """A 2-3-4 tree node.

    Keys sit in three slots; a node with one key always keeps it in the
    middle slot, a node with two keys uses the middle slot and one side.
    Four child slots lie between and around the key slots.
    """

    __slots__ = ("keys", "children", "parent")

    def __init__(self, mid: Process | None = None) -> None:
        self.keys: list[Process | None] = [None, None, None]
        self.children: list[Node | None] = [None, None, None, None]
        self.parent: Node | None = None
        if mid is not None:
            self.keys[1] = mid
            mid.node = self

    def key_count(self) -> int:
        """Number of processes held by the node."""
        return sum(1 for key in self.keys if key is not None)

    def children_count(self) -> int:
        """Number of child nodes."""
        return sum(1 for child in self.children if child is not None)

    def is_leaf(self) -> bool:
        return all(child is None for child in self.children)

    def is_full(self) -> bool:
        return all(key is not None for key in self.keys)

    def add_to_single(self, process: Process) -> int:
        """Place ``process`` beside the single middle key; return its slot."""
        middle = self.keys[1]
        pos = 0 if process.precedes(middle) else 2
        self.keys[pos] = process
        process.node = self
        return pos

    def add_to_pair(self, process: Process) -> int:
        """Add ``process`` to a node holding two keys; return its slot.

        Keys and the child slots next to them are shifted so that the node
        ends up full with its keys in order.
        """
        keys, children = self.keys, self.children
        if keys[2] is not None:
            # layout [-|X|X]
            if process.precedes(keys[1]):
                pos = 0
            elif keys[2].precedes(process) or keys[2].wait_time == process.wait_time:
                keys[0], keys[1] = keys[1], keys[2]
                children[0], children[1] = children[1], children[2]
                pos = 2
            else:
                keys[0] = keys[1]
                children[0] = children[1]
                pos = 1
        else:
            # layout [X|X|-]
            if keys[1].precedes(process) or keys[1].wait_time == process.wait_time:
                pos = 2
            elif process.precedes(keys[0]):
                keys[2], keys[1] = keys[1], keys[0]
                children[3], children[2] = children[2], children[1]
                pos = 0
            else:
                keys[2] = keys[1]
                children[3] = children[2]
                pos = 1
        keys[pos] = process
        process.node = self
        return pos

    def __str__(self) -> str:
        left, middle, right = ("" if key is None else str(key) for key in self.keys)
        return f"[{left}|({middle})|{right}]"

    def __repr__(self) -> str:
        return f"Node{self}"