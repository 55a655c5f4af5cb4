"""Tick-source and scheduler seams used by the pomodoro timer."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .constants import TICK_INTERVAL_SECONDS


class ScheduledCallLike(Protocol):
    """Handle returned by a scheduler for a single deferred callback."""
    def cancel(self) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...


class SchedulerLike(Protocol):
    """Deferred-callback capability required by the timer and tick source."""
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCallLike:
        ...


class TickSource(Protocol):
    """Periodic tick producer with explicit start/stop and one active subscription."""
    @property
    def active(self) -> bool:
        ...

    def start(self, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...


class SchedulerTickSource:
    """Fixed-interval ticks built on a scheduler, never more than one pending."""

    def __init__(
        self,
        scheduler: SchedulerLike,
        *,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._scheduler = scheduler
        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("pomodoro.ticks")
        self._callback: Optional[Callable[[], None]] = None
        self._pending: Optional[ScheduledCallLike] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    def start(self, callback: Callable[[], None]) -> None:
        if self.active:
            self._logger.debug("Tick source already active; replacing subscription")
            self.stop()
        self._callback = callback
        self._schedule_next()

    def stop(self) -> None:
        pending = self._pending
        self._pending = None
        self._callback = None
        if pending is not None:
            pending.cancel()

    def _schedule_next(self) -> None:
        self._pending = self._scheduler.call_later(self._interval_seconds, self._fire)

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        self._pending = None
        # Re-arm first so a callback that stops the source cancels the next tick.
        self._schedule_next()
        callback()
