"""
Statistics reported after a verbose run.

The engine only counts; timing and the static operator count are measured
here, around the engine call.
"""

import time
from dataclasses import dataclass
from typing import Callable, Tuple

from brainfuck import ExecutionCounters, ExecutionResult, count_operators

LABEL_WIDTH = 23


@dataclass
class RunReport:
    operator_count: int
    counters: ExecutionCounters
    elapsed: float

    @classmethod
    def build(cls, code: str, counters: ExecutionCounters, elapsed: float) -> 'RunReport':
        return cls(count_operators(code), counters, elapsed)

    @property
    def operations_per_second(self) -> float:
        if self.elapsed <= 0:
            return 0.0
        return self.counters.operations / self.elapsed

    def lines(self):
        c = self.counters
        rows = [
            ("Operator count:", f"{self.operator_count}"),
            ("Operations performed:", f"{c.operations}"),
            ("Cells used:", f"{c.cells_used} ({c.lowest_cell} : {c.greatest_cell})"),
            ("Shift operations:", f"{c.shifts} ({c.left_shifts} left, {c.right_shifts} right)"),
            ("Time taken:", f"{self.elapsed:.3g}s"),
            ("Operations per second:", f"{self.operations_per_second:.3g}"),
        ]
        return [f"{label:<{LABEL_WIDTH}}{value}" for label, value in rows]

    def format(self) -> str:
        return "\n".join(self.lines())


def timed_run(run: Callable[..., ExecutionResult], *args, **kwargs) -> Tuple[ExecutionResult, float]:
    """Call an interpreter's run method and measure wall-clock time."""
    start_time = time.time()
    result = run(*args, **kwargs)
    return result, time.time() - start_time
