"""Connected websocket clients, sticky-state replay, and broadcast fan-out."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from contracts.ui_protocol import EVENT_HELLO

from .events import StickyEventStore, make_event


class ClientLike(Protocol):
    remote_address: object

    async def send(self, message: str) -> None:
        ...

    async def close(self, code: int = 1000, reason: str = "") -> None:
        ...


class ClientHub:
    """Tracks clients on the server loop and replays sticky state on join.

    `remember` is safe from any thread; the coroutine methods must run on
    the server's event loop.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("ui_server.hub")
        self._clients: set[ClientLike] = set()
        self._sticky = StickyEventStore()

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def remember(self, event_type: str, message: str) -> None:
        self._sticky.remember(event_type, message)

    def sticky_messages(self) -> list[str]:
        return self._sticky.snapshot()

    async def join(self, client: ClientLike) -> None:
        """Send hello and the sticky replay, then start receiving broadcasts."""
        self._logger.info("Client connected: %s", client.remote_address)
        await client.send(make_event(EVENT_HELLO, message="UI websocket connected"))
        for message in self._sticky.snapshot():
            await client.send(message)
        self._clients.add(client)

    def leave(self, client: ClientLike) -> None:
        if client in self._clients:
            self._clients.discard(client)
            self._logger.info("Client disconnected: %s", client.remote_address)

    async def broadcast(self, message: str) -> None:
        clients = tuple(self._clients)
        if not clients:
            return
        results = await asyncio.gather(
            *(client.send(message) for client in clients),
            return_exceptions=True,
        )
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                self._logger.warning("Dropping client after failed send: %s", result)
                self._clients.discard(client)

    async def close_all(self, reason: str) -> None:
        clients = tuple(self._clients)
        self._clients.clear()
        await asyncio.gather(
            *(client.close(code=1001, reason=reason) for client in clients),
            return_exceptions=True,
        )
