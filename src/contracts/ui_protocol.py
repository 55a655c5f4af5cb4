"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Server -> client event types
EVENT_HELLO = "hello"
EVENT_POMODORO = "pomodoro"
EVENT_SETTINGS = "settings"
EVENT_NOTIFICATION_PERMISSION = "notification_permission"
EVENT_ERROR = "error"

# Client -> server message type
MESSAGE_COMMAND = "command"

# Client command actions
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_SWITCH_MODE = "switch_mode"
COMMAND_UPDATE_SETTINGS = "update_settings"
COMMAND_RESET_SETTINGS = "reset_settings"
COMMAND_PREVIEW_SOUND = "preview_sound"

COMMAND_ACTIONS: frozenset[str] = frozenset(
    {
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_SWITCH_MODE,
        COMMAND_UPDATE_SETTINGS,
        COMMAND_RESET_SETTINGS,
        COMMAND_PREVIEW_SOUND,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_POMODORO,
        EVENT_SETTINGS,
        EVENT_NOTIFICATION_PERMISSION,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_NOTIFICATION_PERMISSION,
    EVENT_POMODORO,
    EVENT_ERROR,
)
