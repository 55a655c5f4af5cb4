"""Tick handler that publishes countdown, completion, and auto-start updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pomodoro import PomodoroTick
from pomodoro.constants import (
    ACTION_AUTO_STARTED,
    ACTION_COMPLETED,
    REASON_AUTO_START,
    REASON_COMPLETED,
    REASON_TICK,
)

from .messages import tick_message
from .ui import RuntimeUIPublisher

_TICK_REASONS = {
    ACTION_COMPLETED: REASON_COMPLETED,
    ACTION_AUTO_STARTED: REASON_AUTO_START,
}


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing pomodoro tick events."""
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Publishes every timer-driven snapshot change to the UI."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_pomodoro_tick(self, tick: PomodoroTick) -> None:
        deps = self._dependencies
        if tick.completed:
            deps.logger.info(
                "Interval completed; next %s (%s)",
                tick.snapshot.label,
                tick.snapshot.display_time,
            )
        deps.ui.publish_pomodoro_update(
            tick.snapshot,
            action=tick.action,
            accepted=True,
            reason=_TICK_REASONS.get(tick.action, REASON_TICK),
            message=tick_message(tick.action, tick.snapshot),
        )
