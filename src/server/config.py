"""Configuration model for the control-page HTTP and websocket server."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


WEBSOCKET_PATH = "/ws"
ROOT_PATH = "/"
INDEX_PATH = "/index.html"
HEALTHZ_PATH = "/healthz"

DEFAULT_MAX_MESSAGE_BYTES = 64 * 1024
_MIN_MESSAGE_BYTES = 1024


def default_index_file() -> Path:
    """Bundled control page, next to the frozen executable when packaged."""
    bundle_root = getattr(sys, "_MEIPASS", None)
    base_dir = Path(bundle_root) if bundle_root else Path(__file__).resolve().parents[2]
    return base_dir / "web_ui" / "index.html"


def _require_index_file(raw: str) -> None:
    if not raw:
        raise ServerConfigurationError("ui_server.index_file cannot be empty")
    path = Path(raw)
    if not path.is_file():
        reason = "is not a file" if path.exists() else "was not found"
        raise ServerConfigurationError(f"UI index file {reason}: {path}")


@dataclass(frozen=True)
class UIServerConfig:
    """Validated bind address, control page, and inbound message limit."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")
        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"ui_server.port must be in [1, 65535], got: {self.port}"
            )
        if self.max_message_bytes < _MIN_MESSAGE_BYTES:
            raise ServerConfigurationError(
                f"ui_server.max_message_bytes must be at least {_MIN_MESSAGE_BYTES}"
            )
        if self.enabled:
            _require_index_file(self.index_file)

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @property
    def ui_root(self) -> Path:
        return Path(self.index_file).parent

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        index_file = (settings.index_file or "").strip() or str(default_index_file())
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            index_file=index_file,
            max_message_bytes=settings.max_message_bytes,
        )
