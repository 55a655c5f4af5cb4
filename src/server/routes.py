"""HTTP routing for the control page: index, health check, and UI assets."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH

_TEXT_TYPES = frozenset({"application/javascript", "application/json", "image/svg+xml"})
_KNOWN_TYPES = {
    ".css": "text/css",
    ".html": "text/html",
    ".ico": "image/x-icon",
    ".js": "application/javascript",
    ".json": "application/json",
    ".mp3": "audio/mpeg",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".wav": "audio/wav",
}


@dataclass(frozen=True)
class HttpReply:
    """Status line, body, and content type for a plain HTTP response."""
    status_code: int
    reason_phrase: str
    body: bytes
    content_type: str

    @classmethod
    def ok(cls, body: bytes, content_type: str) -> "HttpReply":
        return cls(200, "OK", body, content_type)

    @classmethod
    def not_found(cls) -> "HttpReply":
        return cls(404, "Not Found", b"not found\n", "text/plain; charset=utf-8")


def content_type_for(path: Path) -> str:
    """Content type for an asset, with a UTF-8 charset on textual payloads."""
    suffix = path.suffix.lower()
    mime_type = _KNOWN_TYPES.get(suffix) or mimetypes.guess_type(path.name)[0]
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


def resolve_asset(ui_root: Path, request_path: str) -> Optional[Path]:
    """Map a request path to a regular file under `ui_root`, or None.

    Hidden files and anything that resolves outside the root are refused.
    """
    relative = request_path.strip("/")
    if not relative:
        return None
    if any(part.startswith(".") for part in relative.split("/")):
        return None

    root = ui_root.resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


class StaticSite:
    """Serves the control page and the assets that sit next to it."""

    def __init__(self, index_file: Path, ui_root: Path):
        self._index_html = index_file.read_bytes()
        self._ui_root = ui_root

    def respond(self, path: str) -> HttpReply:
        if path in (ROOT_PATH, INDEX_PATH):
            return HttpReply.ok(self._index_html, "text/html; charset=utf-8")
        if path == HEALTHZ_PATH:
            return HttpReply.ok(b"ok\n", "text/plain; charset=utf-8")

        asset = resolve_asset(self._ui_root, path)
        if asset is None:
            return HttpReply.not_found()
        return HttpReply.ok(asset.read_bytes(), content_type_for(asset))
