"""Step-by-step simulation of scheduling the processes held in a tree."""

from __future__ import annotations

import sys
from typing import TextIO

from rbsched.process import Process
from rbsched.render import render_234
from rbsched.tree import ProcessTree

_CONSOLE_WIDTH = 120
_FILE_WIDTH = 250


def update_waits(
    tree: ProcessTree, time_slice: int, updated: set[Process], out: TextIO
) -> Process | None:
    """Add ``time_slice`` to the waiting time of every process not yet updated.

    Processes are visited in tree order and recorded in ``updated``.  The
    first process whose maximum waiting time is exceeded is reported to
    ``out`` and returned, so the caller can move it; None when there is none.
    """
    for process in tree.processes():
        if process in updated:
            continue
        updated.add(process)
        if process.update_wait_time(time_slice):
            out.write(f"\nProcess: {process} - wait time exceeded.")
            return process
    return None


def simulation_step(tree: ProcessTree, time_slice: int, out: TextIO) -> None:
    """Run the longest waiting process for one time slice and update the rest."""
    current = tree.leftmost()
    tree.remove(current)
    ran = current.execute(time_slice)
    out.write(f"Process: {current} - was executing for {ran} time units.\n")

    moved: list[Process] = []
    updated: set[Process] = set()
    while (exceeded := update_waits(tree, ran, updated, out)) is not None:
        tree.remove(exceeded)
        moved.append(exceeded)

    for process in moved:
        tree.insert(process)

    if ran == time_slice:
        tree.insert(current)
        out.write(f"\nProcess {current} - isn't finished.\n")
    else:
        out.write(f"\nProcess {current} - is finished.\n")

    width = _CONSOLE_WIDTH if out is sys.stdout else _FILE_WIDTH
    out.write(render_234(tree, width))


def simulate(tree: ProcessTree, time_slice: int, out: TextIO) -> None:
    """Run simulation steps until every process has finished."""
    step = 0
    while not tree.is_empty():
        step += 1
        out.write(f"{step}. step\n")
        simulation_step(tree, time_slice, out)