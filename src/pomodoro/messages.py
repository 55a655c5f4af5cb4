"""Display text for modes and completion notifications."""

from __future__ import annotations

from .constants import LABEL_BREAK, LABEL_FOCUS, LABEL_LONG_BREAK, MODE_FOCUS

FOCUS_COMPLETED_TITLE = "Focus session completed!"
FOCUS_COMPLETED_BODY = "Time for a break!"
BREAK_COMPLETED_TITLE = "Break time is over!"
BREAK_COMPLETED_BODY = "Ready to focus again?"


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def mode_label(mode: str, *, long_break: bool = False) -> str:
    if mode == MODE_FOCUS:
        return LABEL_FOCUS
    if long_break:
        return LABEL_LONG_BREAK
    return LABEL_BREAK


def completion_notification(completed_mode: str) -> tuple[str, str]:
    """Return notification title and body for the interval that just finished."""
    if completed_mode == MODE_FOCUS:
        return FOCUS_COMPLETED_TITLE, FOCUS_COMPLETED_BODY
    return BREAK_COMPLETED_TITLE, BREAK_COMPLETED_BODY
