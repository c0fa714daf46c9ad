import io

from rbsched.process import Process
from rbsched.render import render_234
from rbsched.simulation import simulate, simulation_step, update_waits
from rbsched.tree import ProcessTree


def _tree(*processes):
    tree = ProcessTree()
    for process in processes:
        tree.insert(process)
    return tree


def test_update_waits_reports_exceeded_process():
    slow = Process("x", 10, 1)
    tree = _tree(slow)
    out = io.StringIO()
    updated = set()
    assert update_waits(tree, 2, updated, out) is slow
    assert slow.wait_time == 1
    assert out.getvalue() == "\nProcess: x1 - wait time exceeded."
    assert slow in updated


def test_update_waits_skips_already_updated():
    process = Process("x", 10, 100)
    tree = _tree(process)
    out = io.StringIO()
    updated = set()
    assert update_waits(tree, 3, updated, out) is None
    assert update_waits(tree, 3, updated, out) is None
    assert process.wait_time == 3
    assert out.getvalue() == ""


def test_step_finishes_short_process():
    process = Process("p", 3, 10)
    tree = _tree(process)
    out = io.StringIO()
    simulation_step(tree, 5, out)
    text = out.getvalue()
    assert text.startswith("Process: p0 - was executing for 3 time units.\n")
    assert "\nProcess p0 - is finished.\n" in text
    assert tree.is_empty()


def test_step_reinserts_unfinished_process():
    process = Process("p", 4, 10)
    tree = _tree(process)
    out = io.StringIO()
    simulation_step(tree, 2, out)
    assert process.exec_time == 2
    assert list(tree.processes()) == [process]
    assert "\nProcess p2 - isn't finished.\n" in out.getvalue()
    assert out.getvalue().endswith(render_234(tree, 250))


def test_step_moves_processes_that_waited_too_long():
    first = Process("a", 10, 100, wait_time=5)
    other = Process("b", 10, 1)
    tree = _tree(first, other)
    out = io.StringIO()
    simulation_step(tree, 2, out)
    assert "Process: b1 - wait time exceeded." in out.getvalue()
    assert len(tree) == 2
    assert tree.leftmost() is first
    assert first.wait_time == 7


def test_simulate_runs_until_empty():
    processes = [Process(f"p{i}", 2 + i, 3 + i) for i in range(6)]
    tree = _tree(*processes)
    out = io.StringIO()
    simulate(tree, 2, out)
    text = out.getvalue()
    assert tree.is_empty()
    assert text.startswith("1. step\n")
    assert text.count(" - is finished.") == len(processes)


def test_simulate_on_empty_tree_writes_nothing():
    tree = ProcessTree()
    out = io.StringIO()
    simulate(tree, 3, out)
    assert out.getvalue() == ""