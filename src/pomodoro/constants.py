"""Mode, action, reason, and default-value constants used by the pomodoro timer."""

from __future__ import annotations

MODE_FOCUS = "focus"
MODE_BREAK = "break"

MODES: frozenset[str] = frozenset({MODE_FOCUS, MODE_BREAK})

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_LONG_BREAK_INTERVAL = 4
DEFAULT_AUTO_START = False
DEFAULT_SOUND_ENABLED = True
DEFAULT_SOUND_VOLUME = 50
DEFAULT_NOTIFICATIONS_ENABLED = True

MIN_MINUTES = 1
MIN_LONG_BREAK_INTERVAL = 2
MAX_FOCUS_MINUTES = 120
MAX_BREAK_MINUTES = 60
MAX_LONG_BREAK_MINUTES = 120
MAX_LONG_BREAK_INTERVAL = 10
MIN_SOUND_VOLUME = 0
MAX_SOUND_VOLUME = 100

TICK_INTERVAL_SECONDS = 1.0
AUTO_START_DELAY_SECONDS = 1.0

ACTION_TOGGLE = "toggle"
ACTION_RESET = "reset"
ACTION_SWITCH_MODE = "switch_mode"
ACTION_UPDATE_SETTINGS = "update_settings"
ACTION_RESET_SETTINGS = "reset_settings"
ACTION_PREVIEW_SOUND = "preview_sound"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"
ACTION_AUTO_STARTED = "auto_started"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_MODE_SWITCHED = "mode_switched"
REASON_SETTINGS_UPDATED = "settings_updated"
REASON_SETTINGS_RESET = "settings_reset"
REASON_SOUND_PLAYED = "sound_played"
REASON_INVALID_MODE = "invalid_mode"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_AUTO_START = "auto_start"
REASON_STARTUP = "startup"

LABEL_FOCUS = "FOCUS TIME"
LABEL_BREAK = "BREAK TIME"
LABEL_LONG_BREAK = "LONG BREAK"
