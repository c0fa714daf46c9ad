import random

import pytest

from rbsched.process import Process
from rbsched.tree import ProcessTree


def _proc(wait, name=None, exec_time=0):
    return Process(name or f"p{wait}", 10, 100, wait_time=wait, exec_time=exec_time)


def _build(waits):
    tree = ProcessTree()
    procs = [_proc(w) for w in waits]
    for p in procs:
        tree.insert(p)
    return tree, procs


def _check(tree):
    depths = set()

    def visit(node, depth):
        assert node.keys[1] is not None
        for key in node.keys:
            if key is not None:
                assert key.node is node
        kids = [c for c in node.children if c is not None]
        if kids:
            assert len(kids) == node.key_count() + 1
        else:
            depths.add(depth)
        for child in kids:
            assert child.parent is node
            visit(child, depth + 1)

    if not tree.is_empty():
        assert tree.root.parent is None
        visit(tree.root, 0)
    assert len(depths) <= 1
    waits = [p.wait_time for p in tree.processes()]
    assert waits == sorted(waits, reverse=True)


SEVEN = [70, 60, 50, 40, 30, 20, 10]


def test_empty_tree():
    tree = ProcessTree()
    assert tree.is_empty()
    assert len(tree) == 0
    assert list(tree.processes()) == []
    assert tree.find(0, 0) is None


def test_single_insert():
    tree, (p,) = _build([5])
    assert not tree.is_empty()
    assert tree.root.keys[1] is p
    assert p.node is tree.root


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_random_inserts_keep_invariants(seed):
    rng = random.Random(seed)
    waits = [rng.randint(0, 30) for _ in range(60)]
    tree, procs = _build(waits)
    _check(tree)
    assert len(tree) == len(procs)
    assert set(map(id, tree.processes())) == set(map(id, procs))


def test_find_by_times():
    tree = ProcessTree()
    a = _proc(5, "a", exec_time=1)
    b = _proc(7, "b", exec_time=2)
    c = _proc(3, "c", exec_time=0)
    for p in (a, b, c):
        tree.insert(p)
    assert tree.find(5, 1) is a
    assert tree.find(7, 2) is b
    assert tree.find(3, 0) is c
    assert tree.find(5, 2) is None
    assert tree.find(4, 0) is None


def test_find_node_ends_at_leaf():
    tree, procs = _build(SEVEN)
    smallest = procs[-1]
    assert tree.find_node(_proc(5)) is smallest.node
    assert tree.find_node(_proc(5)).is_leaf()


def test_leftmost_drain_in_order():
    tree, procs = _build(SEVEN)
    drained = []
    while not tree.is_empty():
        p = tree.leftmost()
        tree.remove(p)
        _check(tree)
        drained.append(p)
    assert drained == sorted(procs, key=lambda p: p.wait_time, reverse=True)
    assert len(tree) == 0


def test_remove_internal_key():
    tree, procs = _build(SEVEN)
    target = procs[1]
    tree.remove(target)
    _check(tree)
    assert list(tree) == [p for p in procs if p is not target]


def test_remove_borrows_from_brother():
    tree, procs = _build([5, 3, 8, 1])
    _check(tree)
    tree.remove(procs[2])
    _check(tree)
    assert [p.wait_time for p in tree] == [5, 3, 1]


def test_remove_by_times_returns_process():
    tree, procs = _build([4, 9, 2])
    removed = tree.remove_by_times(9, 0)
    assert removed is procs[1]
    assert tree.find(9, 0) is None
    assert len(tree) == 2


def test_remove_by_times_missing():
    tree, _ = _build([4, 9])
    with pytest.raises(LookupError):
        tree.remove_by_times(1, 1)


def test_remove_twice_raises():
    tree, procs = _build([4, 9, 2])
    tree.remove(procs[0])
    with pytest.raises(ValueError):
        tree.remove(procs[0])


def test_leftmost_on_empty_raises():
    with pytest.raises(LookupError):
        ProcessTree().leftmost()


def test_reinsert_after_removal():
    tree, procs = _build(SEVEN)
    p = tree.leftmost()
    tree.remove(p)
    p.wait_time = 0
    tree.insert(p)
    _check(tree)
    assert list(tree)[-1] is p
    assert len(tree) == len(procs)