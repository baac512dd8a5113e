"""Single-slot cancellable handles for deferred turns."""

from __future__ import annotations

import logging

from broadside.runtime.scheduler import Scheduler, TaskCallback

logger = logging.getLogger(__name__)


class TurnTimer:
    """Holds at most one pending scheduler task.

    Scheduling always cancels and replaces the pending task. The slot is
    cleared before the callback runs.
    """

    def __init__(self, scheduler: Scheduler, name: str) -> None:
        self._scheduler = scheduler
        self._name = name
        self._task_id: int | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def pending(self) -> bool:
        return self._task_id is not None and self._scheduler.pending(self._task_id)

    def schedule(self, delay_seconds: float, callback: TaskCallback) -> None:
        """Cancel any pending task and schedule `callback` after the delay."""
        self.cancel()

        def _fire() -> None:
            self._task_id = None
            callback()

        self._task_id = self._scheduler.call_later(delay_seconds, _fire)
        logger.debug("turn_timer_scheduled timer=%s delay=%.2f", self._name, delay_seconds)

    def cancel(self) -> bool:
        """Cancel the pending task. Returns whether one was pending."""
        task_id = self._task_id
        self._task_id = None
        if task_id is None or not self._scheduler.pending(task_id):
            return False
        self._scheduler.cancel(task_id)
        logger.debug("turn_timer_cancelled timer=%s", self._name)
        return True
