import asyncio
import json
import logging
import sys
import types
import unittest
from pathlib import Path

# Import server.hub without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.events import make_event
from server.hub import ClientHub


class _ClientStub:
    def __init__(self, name: str, fail_send: bool = False):
        self.remote_address = (name, 0)
        self.sent: list[str] = []
        self.closed: tuple[int, str] | None = None
        self._fail_send = fail_send

    async def send(self, message: str) -> None:
        if self._fail_send:
            raise ConnectionError("gone")
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closed = (code, reason)


class ClientHubTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hub = ClientHub(logger=logging.getLogger("test.hub"))

    def test_join_sends_hello_then_sticky_state_in_order(self) -> None:
        self.hub.remember("pomodoro", make_event("pomodoro", mode="focus"))
        self.hub.remember("settings", make_event("settings", settings={}))
        client = _ClientStub("a")

        asyncio.run(self.hub.join(client))

        types_sent = [json.loads(message)["type"] for message in client.sent]
        self.assertEqual(["hello", "settings", "pomodoro"], types_sent)
        self.assertEqual(1, self.hub.client_count)

    def test_broadcast_drops_clients_that_fail(self) -> None:
        healthy = _ClientStub("healthy")
        broken = _ClientStub("broken", fail_send=True)

        async def scenario() -> None:
            await self.hub.join(healthy)
            self.hub._clients.add(broken)
            await self.hub.broadcast("payload")

        with self.assertLogs("test.hub", level="WARNING"):
            asyncio.run(scenario())

        self.assertEqual("payload", healthy.sent[-1])
        self.assertEqual(1, self.hub.client_count)

    def test_close_all_closes_with_going_away_code(self) -> None:
        client = _ClientStub("a")

        async def scenario() -> None:
            await self.hub.join(client)
            await self.hub.close_all("bye")

        asyncio.run(scenario())

        self.assertEqual((1001, "bye"), client.closed)
        self.assertEqual(0, self.hub.client_count)

    def test_broadcast_during_join_does_not_reach_joining_client(self) -> None:
        self.hub.remember("pomodoro", make_event("pomodoro", mode="focus"))
        hub = self.hub

        class _InterleavingClient(_ClientStub):
            async def send(self, message: str) -> None:
                await super().send(message)
                if len(self.sent) == 1:
                    await hub.broadcast("concurrent")

        client = _InterleavingClient("a")
        asyncio.run(self.hub.join(client))

        types_sent = [json.loads(message)["type"] for message in client.sent]
        self.assertEqual(["hello", "pomodoro"], types_sent)
        self.assertEqual(1, self.hub.client_count)

    def test_leave_is_idempotent(self) -> None:
        client = _ClientStub("a")
        asyncio.run(self.hub.join(client))
        self.hub.leave(client)
        self.hub.leave(client)
        self.assertEqual(0, self.hub.client_count)


if __name__ == "__main__":
    unittest.main()
