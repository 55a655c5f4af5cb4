from .service import (
    PomodoroAction,
    PomodoroActionResult,
    PomodoroMode,
    PomodoroSnapshot,
    PomodoroTick,
    PomodoroTimer,
)
from .settings import DEFAULT_SETTINGS, TimerSettings
from .ticks import SchedulerTickSource, TickSource

__all__ = [
    "DEFAULT_SETTINGS",
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroMode",
    "PomodoroSnapshot",
    "PomodoroTick",
    "PomodoroTimer",
    "SchedulerTickSource",
    "TickSource",
    "TimerSettings",
]
