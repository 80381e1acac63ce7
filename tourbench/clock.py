# tourbench/clock.py

import time
from typing import Callable, Optional


class Deadline:
    """
    Wall-clock budget measured from construction.

    Args:
        budget_ms: Time allowed, in milliseconds
        clock: Zero-argument callable returning seconds (defaults to
            time.perf_counter). Tests inject a stepping clock here.
        start: Start instant in clock seconds; defaults to "now"
    """

    def __init__(
        self,
        budget_ms: float,
        clock: Callable[[], float] = time.perf_counter,
        start: Optional[float] = None,
    ):
        self.clock = clock
        self.start = clock() if start is None else start
        self.budget_ms = budget_ms
        self.end = self.start + budget_ms / 1000.0

    def elapsed_ms(self) -> float:
        return (self.clock() - self.start) * 1000.0

    def remaining_ms(self) -> float:
        return max(0.0, (self.end - self.clock()) * 1000.0)

    def expired(self) -> bool:
        return self.clock() >= self.end

    def fraction(self) -> float:
        """Elapsed share of the budget, clamped to [0, 1]."""
        if self.budget_ms <= 0:
            return 1.0
        return min(1.0, max(0.0, self.elapsed_ms() / self.budget_ms))

    def sub(self, budget_ms: float) -> "Deadline":
        """A nested deadline starting now, never ending later than this one."""
        return Deadline(min(budget_ms, self.remaining_ms()), clock=self.clock)
