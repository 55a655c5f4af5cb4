"""Status and rejection text shown alongside pomodoro updates."""

from __future__ import annotations

from pomodoro import PomodoroSnapshot
from pomodoro.constants import (
    ACTION_AUTO_STARTED,
    ACTION_COMPLETED,
    REASON_INVALID_MODE,
    REASON_UNSUPPORTED_ACTION,
)


def status_message(snapshot: PomodoroSnapshot) -> str:
    """Build status text for the current timer snapshot."""
    state = "running" if snapshot.running else "paused"
    return (
        f"{snapshot.label} {snapshot.display_time} ({state}, "
        f"{snapshot.completed_focus_sessions} sessions)"
    )


def tick_message(action: str, snapshot: PomodoroSnapshot) -> str:
    if action == ACTION_COMPLETED:
        return f"Interval complete. Next: {snapshot.label} {snapshot.display_time}"
    if action == ACTION_AUTO_STARTED:
        return f"{snapshot.label} started automatically"
    return status_message(snapshot)


def rejection_text(action: str, reason: str) -> str:
    if reason == REASON_INVALID_MODE:
        return "Mode must be 'focus' or 'break'."
    if reason == REASON_UNSUPPORTED_ACTION:
        return f"Unsupported action: {action}"
    return f"The {action} action is not possible right now."
