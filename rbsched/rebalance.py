"""Removal from a 2-3-4 tree and the rebalancing that follows it.

Every function that can change the root takes the current root and returns
the root the tree has afterwards.
"""

from __future__ import annotations

from rbsched.node import Node
from rbsched.process import Process


def _set_key(node: Node, slot: int, process: Process) -> None:
    node.keys[slot] = process
    process.node = node


def _set_child(node: Node, slot: int, child: Node | None) -> None:
    node.children[slot] = child
    if child is not None:
        child.parent = node


def _child_slot(parent: Node, child: Node) -> int:
    return next((slot for slot, c in enumerate(parent.children[:3]) if c is child), 3)


def _key_slot(node: Node, process: Process) -> int:
    return next((slot for slot, k in enumerate(node.keys[:2]) if k is process), 2)


def are_real_brothers(a: Node | None, b: Node | None) -> bool:
    """True when ``a`` and ``b`` are siblings inside one red-black cluster.

    Under a one-key parent all children are real brothers; under a two-key
    parent only the pair on the side holding both keys; under a full parent
    the first two and the last two children.
    """
    if a is None or b is None:
        return False
    parent = a.parent
    if parent is None or b.parent is None or parent is not b.parent:
        return False

    count = parent.key_count()
    if count <= 1:
        return True

    children = parent.children

    def pair(i: int, j: int) -> bool:
        return (a is children[i] and b is children[j]) or (a is children[j] and b is children[i])

    if count == 2:
        if parent.keys[0] is not None and parent.keys[1] is not None:
            return pair(0, 1)
        return pair(2, 3)
    return pair(0, 1) or pair(2, 3)


def find_successor(node: Node, position: int) -> Process:
    """The in-order successor of the key in slot ``position`` of ``node``."""
    curr = node.children[position + 1]
    while not curr.is_leaf():
        curr = next(child for child in curr.children if child is not None)
    return next(key for key in curr.keys if key is not None)


def _rebalance(node: Node, parent: Node, prev_pos: int | None) -> Node | None:
    """Refill ``node``, which has lost its only key.

    Borrows a key through the parent from a brother that can spare one, or
    joins ``node`` with a brother.  ``prev_pos`` is the slot of the single
    child that ``node`` keeps, or None when ``node`` is a leaf.  Returns the
    brother that absorbed ``node`` after a join, otherwise None.
    """
    nk, nc = node.keys, node.children
    pk, pc = parent.keys, parent.children
    internal = prev_pos is not None

    par_pos = _child_slot(parent, node)
    right = pc[par_pos + 1] if par_pos != 3 else None
    left = pc[par_pos - 1] if par_pos != 0 else None
    real_right = are_real_brothers(node, right)
    real_left = are_real_brothers(node, left)

    if real_right and right.key_count() > 1:
        rk, rc = right.keys, right.children
        if right.key_count() == 2:
            leftmost = 0 if rk[0] is not None else 1
            _set_key(node, 1, pk[par_pos])
            _set_key(parent, par_pos, rk[leftmost])
            if internal:
                nc[1] = nc[prev_pos]
                nc[0] = None
            if leftmost == 0:
                rk[0] = None
                if internal:
                    _set_child(node, 2, rc[0])
                    rc[0] = None
            else:
                rk[1], rk[2] = rk[2], None
                if internal:
                    _set_child(node, 2, rc[1])
                    rc[1], rc[2], rc[3] = rc[2], rc[3], None
        else:
            _set_key(node, 1, pk[par_pos])
            _set_key(parent, par_pos, rk[1])
            _set_key(node, 2, rk[0])
            rk[0], rk[1], rk[2] = None, rk[2], None
            if internal:
                nc[1] = nc[prev_pos]
                _set_child(node, 2, rc[0])
                _set_child(node, 3, rc[1])
                nc[0] = None
                rc[0], rc[1], rc[2], rc[3] = None, rc[2], rc[3], None
        return None

    if real_left and left.key_count() > 1:
        lk, lc = left.keys, left.children
        if left.key_count() == 2:
            rightmost = 2 if lk[2] is not None else 1
            _set_key(node, 1, pk[par_pos - 1])
            _set_key(parent, par_pos - 1, lk[rightmost])
            if internal:
                nc[2] = nc[prev_pos]
                nc[3] = None
            if rightmost == 2:
                lk[2] = None
                if internal:
                    _set_child(node, 1, lc[3])
                    lc[3] = None
            else:
                lk[1], lk[0] = lk[0], None
                if internal:
                    _set_child(node, 1, lc[2])
                    lc[2], lc[1], lc[0] = lc[1], lc[0], None
        else:
            _set_key(node, 1, pk[par_pos - 1])
            _set_key(parent, par_pos - 1, lk[1])
            _set_key(node, 0, lk[2])
            lk[1], lk[0], lk[2] = lk[0], None, None
            if internal:
                nc[2] = nc[prev_pos]
                _set_child(node, 0, lc[2])
                _set_child(node, 1, lc[3])
                nc[3] = None
                lc[3] = None
                lc[2], lc[1], lc[0] = lc[1], lc[0], None
        return None

    if real_right:
        rk, rc = right.keys, right.children
        rk[2] = rk[1]
        _set_key(right, 1, pk[par_pos])
        pk[par_pos] = None
        if par_pos == 0:
            pc[0] = None
        else:
            pc[par_pos] = right
            pc[par_pos + 1] = None
        if internal:
            rc[3], rc[2] = rc[2], rc[1]
            _set_child(right, 1, nc[prev_pos])
        return right

    if real_left:
        lk, lc = left.keys, left.children
        lk[0] = lk[1]
        _set_key(left, 1, pk[par_pos - 1])
        pk[par_pos - 1] = None
        if par_pos == 3:
            pc[3] = None
        else:
            pc[par_pos] = left
            pc[par_pos - 1] = None
        if internal:
            lc[0], lc[1] = lc[1], lc[2]
            _set_child(left, 2, nc[prev_pos])
        return left

    # No real brothers: the parent holds two keys and the brother beside
    # ``node`` belongs to a different cluster.
    if right is not None and right.key_count() > 1:
        rk, rc = right.keys, right.children
        _set_key(node, 1, pk[1])
        pk[1], pk[2] = pk[2], None
        if right.key_count() == 2:
            leftmost = 0 if rk[0] is not None else 1
            _set_key(parent, 0, rk[leftmost])
            if internal:
                nc[1] = nc[prev_pos]
                nc[0] = None
            if leftmost == 0:
                rk[0] = None
                if internal:
                    _set_child(node, 2, rc[0])
                    rc[0] = None
            else:
                rk[1], rk[2] = rk[2], None
                if internal:
                    _set_child(node, 2, rc[1])
                    rc[1], rc[2], rc[3] = rc[2], rc[3], None
        else:
            _set_key(parent, 0, rk[1])
            _set_key(node, 2, rk[0])
            rk[0], rk[1], rk[2] = None, rk[2], None
            if internal:
                nc[1] = nc[prev_pos]
                _set_child(node, 2, rc[0])
                _set_child(node, 3, rc[1])
                nc[0] = None
                rc[0], rc[1], rc[2], rc[3] = None, rc[2], rc[3], None
        pc[0], pc[1], pc[2], pc[3] = pc[1], pc[2], pc[3], None
        return None

    if left is not None and left.key_count() > 1:
        lk, lc = left.keys, left.children
        _set_key(node, 1, pk[1])
        pk[1], pk[0] = pk[0], None
        if internal:
            nc[2] = nc[prev_pos]
            nc[3] = None
        if left.key_count() == 2:
            rightmost = 2 if lk[2] is not None else 1
            _set_key(parent, 2, lk[rightmost])
            if rightmost == 2:
                lk[2] = None
                if internal:
                    _set_child(node, 1, lc[3])
                    lc[3] = None
            else:
                lk[1], lk[0] = lk[0], None
                if internal:
                    _set_child(node, 1, lc[2])
                    lc[2], lc[1], lc[0] = lc[1], lc[0], None
        else:
            _set_key(parent, 2, lk[1])
            _set_key(node, 0, lk[0])
            lk[1], lk[0] = lk[0], None
            if internal:
                nc[2] = nc[prev_pos]
                _set_child(node, 0, lc[2])
                _set_child(node, 1, lc[3])
                nc[3] = None
                lc[3] = None
                lc[2], lc[1], lc[0] = lc[1], lc[0], None
        pc[3], pc[2], pc[1], pc[0] = pc[2], pc[1], pc[0], None
        return None

    brother = right if right is not None else left
    if brother is None:
        return None

    bk, bc = brother.keys, brother.children
    if brother is right:
        bk[2] = bk[1]
    else:
        bk[0] = bk[1]
    _set_key(brother, 1, pk[1])
    pk[par_pos] = None
    if pk[0] is not None:
        pk[1], pk[0] = pk[0], None
        pc[1], pc[0], pc[2], pc[3] = pc[0], None, brother, None
    else:
        pk[1], pk[2] = pk[2], None
        pc[2], pc[3], pc[1], pc[0] = pc[3], None, brother, None
    if internal:
        if brother is right:
            bc[3], bc[2] = bc[2], bc[1]
            _set_child(brother, 1, nc[prev_pos])
        else:
            bc[0], bc[1] = bc[1], bc[2]
            _set_child(brother, 2, nc[prev_pos])
    return brother


def fix_up(root: Node, node: Node) -> Node:
    """Repair the tree above ``node``, whose parent was left without keys.

    Walks up while joins keep emptying ancestors and returns the new root.
    """
    while True:
        prev = node
        node = node.parent
        parent = node.parent
        merged = _rebalance(node, parent, _child_slot(node, prev))
        if merged is not None:
            node = merged
            node.parent = parent
        if parent.parent is None or parent.key_count() != 0:
            break

    if node.parent.key_count() == 0 and node.parent.parent is None:
        root = node
        root.parent = None
    return root


def remove_process(root: Node, process: Process) -> Node:
    """Remove ``process`` from the tree rooted at ``root``; return the new root."""
    node = process.node
    if node is None or not any(key is process for key in node.keys):
        raise ValueError(f"process {process.name!r} is not in the tree")

    pos = _key_slot(node, process)

    if not node.is_leaf():
        successor = find_successor(node, pos)
        successor_node = successor.node
        successor_pos = _key_slot(successor_node, successor)
        _set_key(node, pos, successor)
        node, pos = successor_node, successor_pos

    keys = node.keys
    if node.key_count() > 1:
        if pos in (0, 2):
            keys[pos] = None
        elif keys[2] is not None:
            keys[1], keys[2] = keys[2], None
        else:
            keys[1], keys[0] = keys[0], None
        return root

    parent = node.parent
    if parent is None:
        keys[1] = None
        return root

    merged = _rebalance(node, parent, None)
    if merged is not None and parent.key_count() == 0:
        if parent.parent is not None:
            root = fix_up(root, merged)
        else:
            root = merged
            root.parent = None
    return root