# rbsched

A small library that simulates process scheduling.

Processes are kept in a 2-3-4 tree, ordered by their current waiting time.
The process that has waited longest sits furthest left. Each simulation step
takes that process out of the tree and runs it for one time slice. Every
other process waits for as long as the step ran. If a process waits longer
than its maximum, its waiting time is reduced by that maximum and the
process is put back into the tree. You can render the tree as a 2-3-4 tree
or as the matching red-black tree.

## Installation

```
pip install .
```

## Usage

```python
import io

from rbsched.process import Process
from rbsched.tree import ProcessTree
from rbsched.render import render_234, render_red_black
from rbsched.simulation import simulate

tree = ProcessTree()
tree.insert(Process("A", 10, 5))
tree.insert(Process("B", 4, 8))
tree.insert(Process("C", 7, 3))

print(render_234(tree, 120))
print(render_red_black(tree))

log = io.StringIO()
simulate(tree, 3, log)
print(log.getvalue())
```

## Modules

### `rbsched.process`

`Process(name, complete_time, max_wait_time)` describes one process. It
tracks `wait_time` and `exec_time`, and both start at 0.

- `execute(time_slice)` runs the process and returns how long it ran. If
  less than a full slice of work remains, the process is not changed and the
  remaining time is returned.
- `update_wait_time(time_slice)` adds to the waiting time. It returns `True`
  when the maximum was exceeded; in that case the maximum is also subtracted
  from the waiting time.
- `details()` returns a multi-line description of the process.
- `str(process)` is the name followed by the current waiting time.

### `rbsched.tree`

`ProcessTree` is the 2-3-4 tree. It provides:

- `insert(process)` adds a process.
- `remove(process)` takes a process out. It raises `ValueError` if the
  process is not in the tree.
- `find(wait_time, exec_time)` returns the first process with those times,
  or `None`.
- `remove_by_times(wait_time, exec_time)` removes and returns that process.
  It raises `LookupError` if there is no such process.
- `leftmost()` returns the process that has waited longest.
- `processes()` yields the processes in tree order.
- `is_empty()` tells whether the tree holds any process.
- `len(tree)` and iteration over the tree are supported.

### `rbsched.redblack`

`build_red_black(tree)` turns the tree into a red-black tree made of
`RedBlackNode`s, whose colours are given by `Color`. It returns `None` for an
empty tree.

### `rbsched.render`

- `render_234(tree, width)` draws the tree level by level.
- `render_red_black(tree)` draws the red-black tree sideways. Black nodes
  are shown in parentheses.

### `rbsched.simulation`

- `simulation_step(tree, time_slice, out)` runs one step. It writes a report
  of the step and the resulting tree to the text stream `out`. The tree is
  drawn 120 columns wide when `out` is `sys.stdout`, and 250 columns wide
  otherwise.
- `simulate(tree, time_slice, out)` repeats steps until the tree is empty,
  numbering each step.
- `update_waits(tree, time_slice, updated, out)` applies one round of
  waiting-time updates.

## What this package does not do

The package is a library only. It has no command-line program and no
interactive menu. It cannot read processes from a file or from standard
input. You build the tree in your own code and pass an output stream to the
simulation functions.