"""Utilities for serializing UI events, parsing commands, and sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from contracts.ui_protocol import (
    COMMAND_ACTIONS,
    MESSAGE_COMMAND,
    STICKY_EVENT_ORDER,
    STICKY_EVENT_TYPES,
)


class ClientMessageError(ValueError):
    """Raised when an inbound websocket message is not a valid command."""


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command_message(raw: str | bytes) -> dict[str, Any]:
    """Decode a client `command` message into its action and arguments."""
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as error:
        raise ClientMessageError(f"Invalid JSON message: {error}") from error

    if not isinstance(decoded, dict):
        raise ClientMessageError("Message must be a JSON object")
    if decoded.get("type") != MESSAGE_COMMAND:
        raise ClientMessageError(f"Unsupported message type: {decoded.get('type')!r}")

    action = decoded.get("action")
    if not isinstance(action, str) or action not in COMMAND_ACTIONS:
        raise ClientMessageError(f"Unsupported command action: {action!r}")

    arguments = {
        key: value
        for key, value in decoded.items()
        if key not in ("type", "action")
    }
    return {"action": action, "arguments": arguments}


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
