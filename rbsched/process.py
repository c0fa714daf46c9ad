"""Processes scheduled by the tree, ordered by their current waiting time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rbsched.node import Node

_RULE = "--------------------------\n"


@dataclass(eq=False)
class Process:
    """A schedulable process.

    ``complete_time`` is the execution time the process needs in total and
    ``max_wait_time`` the longest it may wait before it is rescheduled.
    Processes compare by identity; ordering is done with :meth:`precedes`.
    """

    name: str
    complete_time: int
    max_wait_time: int
    wait_time: int = 0
    exec_time: int = 0
    node: Node | None = field(default=None, repr=False)

    def execute(self, time_slice: int) -> int:
        """Run for ``time_slice`` units and return how long the process ran.

        When less than a full slice of work remains, the remaining time is
        returned and the process is left untouched.
        """
        remaining = self.complete_time - self.exec_time
        if remaining < time_slice:
            return remaining
        self.exec_time += time_slice
        self.wait_time += time_slice
        return time_slice

    def update_wait_time(self, time_slice: int) -> bool:
        """Add ``time_slice`` to the waiting time.

        Returns True when the maximum waiting time was exceeded, in which case
        the maximum is subtracted from the waiting time.
        """
        self.wait_time += time_slice
        if self.wait_time > self.max_wait_time:
            self.wait_time -= self.max_wait_time
            return True
        return False

    def precedes(self, other: Any) -> bool:
        """True when this process belongs to the left of ``other`` in the tree."""
        return self.wait_time > other.wait_time

    def details(self) -> str:
        """A multi-line description of the process state."""
        return (
            _RULE
            + f"Process: {self.name}\n"
            + f"Current wait time:\t{self.wait_time}\n"
            + f"Current execution time:\t{self.exec_time}\n"
            + f"Max wait time:\t{self.max_wait_time}\n"
            + f"Time to completion:\t{self.complete_time}\n"
            + _RULE
        )

    def __str__(self) -> str:
        return f"{self.name}{self.wait_time}"