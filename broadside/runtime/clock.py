"""Wall-clock driver that feeds elapsed time into a Scheduler."""

from __future__ import annotations

import time
from collections.abc import Callable

from broadside.runtime.scheduler import Scheduler


class RealTimeDriver:
    """Runs scheduler callbacks at their due time against a monotonic clock.

    `time_scale` above 1.0 plays back faster than real time.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        time_scale: float = 1.0,
        time_source: Callable[[], float] | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if time_scale <= 0.0:
            raise ValueError("time_scale must be > 0")
        self._scheduler = scheduler
        self._time_scale = time_scale
        self._time_source = time_source or time.monotonic
        self._sleep = sleep or time.sleep
        self._origin = self._time_source() - scheduler.now_seconds / time_scale

    def scheduler_time(self) -> float:
        """Map the wall clock onto the scheduler timeline."""
        return max(
            self._scheduler.now_seconds,
            (self._time_source() - self._origin) * self._time_scale,
        )

    def run_until_idle(self, *, max_seconds: float | None = None) -> int:
        """Sleep and dispatch until no live task remains.

        `max_seconds` bounds the scheduler-time span covered by this call.
        """
        executed = 0
        deadline = None if max_seconds is None else self._scheduler.now_seconds + max_seconds
        while True:
            due = self._scheduler.next_due_seconds
            if due is None:
                return executed
            if deadline is not None and due > deadline:
                return executed
            wait = (due - self.scheduler_time()) / self._time_scale
            if wait > 0.0:
                self._sleep(wait)
            executed += self._scheduler.run_due(max(due, self.scheduler_time()))
