"""
Wall-clock time budget for one invocation.
"""

import time
from typing import Callable

# Stays under the 300-second execution ceiling of the hosting environment
DEFAULT_TIME_BUDGET_SECONDS = 280.0


class TimeBudget:
    """
    Tracks elapsed time since the invocation started.

    Usage:
        budget = TimeBudget(280)
        budget.start()
        ...
        if budget.exceeded():
            checkpoint()
    """

    def __init__(
        self,
        threshold_seconds: float = DEFAULT_TIME_BUDGET_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if threshold_seconds <= 0:
            raise ValueError(f"threshold_seconds must be positive, got {threshold_seconds}")

        self.threshold_seconds = threshold_seconds
        self.clock = clock
        self._started_at: float | None = None

    def start(self) -> None:
        self._started_at = self.clock()

    def elapsed(self) -> float:
        """Seconds since start(); starts the clock on first use."""
        if self._started_at is None:
            self.start()
        return self.clock() - self._started_at

    def exceeded(self) -> bool:
        return self.elapsed() > self.threshold_seconds
