"""Single-threaded deadline scheduler serviced by the runtime loop."""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, Optional


class ScheduledCall:
    """Cancellable handle for one deferred callback."""
    __slots__ = ("deadline", "callback", "_cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class Scheduler:
    """Min-heap of deadlines on a monotonic clock.

    Callbacks only run from `run_due`, on the thread that services the loop,
    so cancelling a handle before the next `run_due` call guarantees it never
    fires.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._clock = clock
        self._logger = logger or logging.getLogger("runtime.scheduler")
        self._heap: list[tuple[float, int, ScheduledCall]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self._clock() + max(0.0, float(delay_seconds)), callback)
        heapq.heappush(self._heap, (call.deadline, next(self._sequence), call))
        return call

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, call in self._heap if not call.cancelled)

    def next_deadline(self) -> Optional[float]:
        self._discard_cancelled()
        if not self._heap:
            return None
        return self._heap[0][0]

    def seconds_until_next(self, default: float) -> float:
        """Time to wait before the next deadline, capped at `default`."""
        deadline = self.next_deadline()
        if deadline is None:
            return default
        return max(0.0, min(default, deadline - self._clock()))

    def run_due(self) -> int:
        """Run every non-cancelled callback whose deadline has passed."""
        now = self._clock()
        executed = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, call = heapq.heappop(self._heap)
            if call.cancelled:
                continue
            call.cancel()
            try:
                call.callback()
            except Exception as error:
                self._logger.error("Scheduled callback failed: %s", error, exc_info=True)
            executed += 1
        return executed

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)
