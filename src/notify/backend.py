"""Plyer-backed delivery of desktop notifications."""

from __future__ import annotations

import logging
from typing import Optional

from plyer import notification

from .config import NotifyConfig


class NotificationError(Exception):
    """Raised when a desktop notification cannot be delivered."""


class PlyerNotificationBackend:
    """Shows notifications through the platform implementation chosen by plyer."""
    def __init__(
        self,
        config: NotifyConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger(__name__)

    def show(self, title: str, body: str) -> None:
        kwargs = {
            "title": title,
            "message": body,
            "app_name": self._config.app_name,
            "timeout": self._config.timeout_seconds,
        }
        if self._config.app_icon:
            kwargs["app_icon"] = self._config.app_icon
        try:
            notification.notify(**kwargs)
        except Exception as error:
            raise NotificationError(f"Desktop notification failed: {error}") from error
        self._logger.debug("Notification shown: %s", title)
