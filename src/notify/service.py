"""Desktop notifier with a browser-style one-time permission prompt."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

from .backend import NotificationError
from .config import (
    PERMISSION_DEFAULT,
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    NotifyConfig,
)

PERMISSION_PROBE_TITLE = "Notifications enabled"
PERMISSION_PROBE_BODY = "You will be notified when an interval ends."


class NotificationBackendLike(Protocol):
    def show(self, title: str, body: str) -> None:
        ...


class DesktopNotifier:
    """Gatekeeps notification delivery behind a permission state.

    Permission starts at the configured value. While it is `default`,
    `request_permission` asks `prompt` exactly once; the answer is kept for
    the rest of the process and never asked again. The default prompt shows a
    probe notification and grants permission when the platform delivers it.
    """

    def __init__(
        self,
        config: NotifyConfig,
        backend: NotificationBackendLike,
        *,
        prompt: Optional[Callable[[], bool]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._backend = backend
        self._prompt = prompt or self._probe_backend
        self._logger = logger or logging.getLogger("notify")
        self._permission = config.permission
        self._lock = threading.Lock()

    @property
    def permission(self) -> str:
        with self._lock:
            return self._permission

    def request_permission(self) -> str:
        with self._lock:
            if self._permission != PERMISSION_DEFAULT:
                return self._permission
            try:
                granted = bool(self._prompt())
            except Exception as error:
                self._logger.warning("Notification permission prompt failed: %s", error)
                granted = False
            self._permission = PERMISSION_GRANTED if granted else PERMISSION_DENIED
            self._logger.info("Notification permission %s", self._permission)
            return self._permission

    def notify(self, title: str, body: str) -> None:
        if not self._config.enabled:
            return
        if self.permission != PERMISSION_GRANTED:
            self._logger.debug("Notification suppressed (permission=%s)", self.permission)
            return
        try:
            self._backend.show(title, body)
        except NotificationError as error:
            self._logger.warning("%s", error)

    def _probe_backend(self) -> bool:
        if not self._config.enabled:
            return False
        try:
            self._backend.show(PERMISSION_PROBE_TITLE, PERMISSION_PROBE_BODY)
        except NotificationError as error:
            self._logger.warning("Notifications unavailable: %s", error)
            return False
        return True
