"""Public exports for desktop notification components."""

from .backend import NotificationError, PlyerNotificationBackend
from .config import (
    PERMISSION_DEFAULT,
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    NotifyConfig,
    NotifyConfigurationError,
)
from .service import DesktopNotifier

__all__ = [
    "DesktopNotifier",
    "NotificationError",
    "NotifyConfig",
    "NotifyConfigurationError",
    "PERMISSION_DEFAULT",
    "PERMISSION_DENIED",
    "PERMISSION_GRANTED",
    "PlyerNotificationBackend",
]
