"""The 2-3-4 tree of processes that drives the scheduler."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from rbsched.node import Node
from rbsched.process import Process
from rbsched.rebalance import remove_process


def _attach(node: Node, slot: int, child: Node | None) -> None:
    node.children[slot] = child
    if child is not None:
        child.parent = node


def _next_child(node: Node, goes_left: Callable[[Process], bool]) -> Node | None:
    """The child to descend into, or None when the search ends at ``node``."""
    last = None
    for slot, key in enumerate(node.keys):
        if key is None:
            continue
        last = slot
        if goes_left(key):
            return node.children[slot]
    if last is None:
        return None
    return node.children[last + 1]


def _walk(node: Node | None) -> Iterator[Process]:
    if node is None:
        return
    for child, key in zip(node.children, node.keys):
        yield from _walk(child)
        if key is not None:
            yield key
    yield from _walk(node.children[3])


class ProcessTree:
    """A 2-3-4 tree of processes; larger waiting times sit further left."""

    def __init__(self) -> None:
        self.root = Node()

    def is_empty(self) -> bool:
        return self.root.key_count() == 0

    def __len__(self) -> int:
        return sum(1 for _ in self.processes())

    def __iter__(self) -> Iterator[Process]:
        return self.processes()

    def processes(self) -> Iterator[Process]:
        """All processes in tree order, from the longest waiting one."""
        return _walk(self.root)

    def find(self, wait_time: int, exec_time: int) -> Process | None:
        """The first process with the given waiting and execution time, if any."""
        curr: Node | None = self.root
        while curr is not None:
            last = None
            target = None
            for slot, key in enumerate(curr.keys):
                if key is None:
                    continue
                last = slot
                if key.wait_time == wait_time and key.exec_time == exec_time:
                    return key
                if wait_time > key.wait_time:
                    target = slot
                    break
            if last is None:
                return None
            curr = curr.children[last + 1 if target is None else target]
        return None

    def find_node(self, process: Process) -> Node:
        """The node where a search for ``process`` ends."""
        curr = self.root
        while True:
            child = _next_child(curr, process.precedes)
            if child is None:
                return curr
            curr = child

    def insert(self, process: Process) -> None:
        """Insert ``process`` according to its current waiting time."""
        node = self.find_node(process)
        count = node.key_count()
        if count == 1:
            node.add_to_single(process)
        elif count == 2:
            node.add_to_pair(process)
        elif count == 3:
            self._split_insert(process, node)
        else:
            self.root = node
            node.keys[1] = process
            process.node = node

    def _split_insert(self, process: Process, node: Node) -> None:
        """Insert into a full leaf, splitting full nodes on the way up."""
        keys = node.keys
        left, right = Node(keys[0]), Node(keys[2])
        if process.precedes(keys[1]):
            left.keys[0 if process.precedes(keys[0]) else 2] = process
            process.node = left
        else:
            right.keys[0 if process.precedes(keys[2]) else 2] = process
            process.node = right

        up = keys[1]
        above = node.parent
        while above is not None and above.key_count() == 3:
            split_left, split_right = left, right
            node = above
            above = node.parent
            keys, kids = node.keys, node.children
            left, right = Node(keys[0]), Node(keys[2])

            if up.precedes(keys[1]):
                _attach(right, 1, kids[2])
                _attach(right, 2, kids[3])
                if up.precedes(keys[0]):
                    _attach(left, 0, split_left)
                    _attach(left, 1, split_right)
                    _attach(left, 2, kids[1])
                    left.keys[0] = up
                else:
                    _attach(left, 1, kids[0])
                    _attach(left, 2, split_left)
                    _attach(left, 3, split_right)
                    left.keys[2] = up
                up.node = left
            else:
                _attach(left, 1, kids[0])
                _attach(left, 2, kids[1])
                if up.precedes(keys[2]):
                    _attach(right, 0, split_left)
                    _attach(right, 1, split_right)
                    _attach(right, 2, kids[3])
                    right.keys[0] = up
                else:
                    _attach(right, 1, kids[2])
                    _attach(right, 2, split_left)
                    _attach(right, 3, split_right)
                    right.keys[2] = up
                up.node = right
            up = keys[1]

        if above is not None:
            count = above.key_count()
            if count == 1:
                pos = above.add_to_single(up)
            elif count == 2:
                pos = above.add_to_pair(up)
            else:
                pos = 0
            _attach(above, pos, left)
            _attach(above, pos + 1, right)
        else:
            new_root = Node(up)
            _attach(new_root, 1, left)
            _attach(new_root, 2, right)
            self.root = new_root

    def remove(self, process: Process) -> None:
        """Remove ``process``; raises ValueError when it is not in the tree."""
        self.root = remove_process(self.root, process)
        process.node = None

    def remove_by_times(self, wait_time: int, exec_time: int) -> Process:
        """Remove and return the first process with the given times."""
        process = self.find(wait_time, exec_time)
        if process is None:
            raise LookupError("Process not found. Deletion failed.")
        self.remove(process)
        return process

    def leftmost(self) -> Process:
        """The process that has waited longest."""
        if self.is_empty():
            raise LookupError("tree is empty")
        curr = self.root
        while not curr.is_leaf():
            curr = next(child for child in curr.children if child is not None)
        return next(key for key in curr.keys if key is not None)