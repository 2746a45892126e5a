"""Pytest configuration and shared fixtures for relay API tests."""
import os
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the real board and notifier out of reach while testing
os.environ.setdefault("HLK_SW16_HOST", "127.0.0.1")
os.environ.setdefault("HLK_SW16_PORT", "9")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from app.core.exceptions import (  # noqa: E402
    DeviceCloseError,
    DeviceCommandError,
    DeviceReadError,
    DeviceUnavailableError,
)
from app.services.relay_board import RelayBoard  # noqa: E402


def make_frame(states: List[int], header: bytes = b"\xcc\x0c", trailer: bytes = b"\x00\xdd") -> bytes:
    """Build a status frame from sixteen relay bytes."""
    return header + bytes(states) + trailer


class FakeDevice:
    """Scripted relay board shared by every connection a test opens."""

    def __init__(self, frames: Optional[List[bytes]] = None):
        self.frames = list(frames or [])
        self.commands: List[tuple] = []
        self.connects = 0
        self.closes = 0
        self.fail_connect = False
        self.fail_command = False
        self.fail_read = False
        self.fail_close = False

    def factory(self, host: str, port: int, timeout: float) -> "FakeConnection":
        return FakeConnection(self)


class FakeConnection:
    def __init__(self, device: FakeDevice):
        self.device = device

    def connect(self):
        if self.device.fail_connect:
            raise DeviceUnavailableError("cannot connect to 127.0.0.1:9: connection refused")
        self.device.connects += 1

    def _command(self, *command):
        if self.device.fail_command:
            raise DeviceCommandError("cannot send command to 127.0.0.1:9: broken pipe")
        self.device.commands.append(command)

    def relay_on(self, relay_id: int):
        self._command("on", relay_id)

    def relay_off(self, relay_id: int):
        self._command("off", relay_id)

    def status_relays(self):
        self._command("status")

    def read_message(self) -> bytes:
        if self.device.fail_read or not self.device.frames:
            raise DeviceReadError("connection to 127.0.0.1:9 closed after 0 of 20 bytes")
        if len(self.device.frames) == 1:
            return self.device.frames[0]
        return self.device.frames.pop(0)

    def close(self):
        self.device.closes += 1
        if self.device.fail_close:
            raise DeviceCloseError("cannot close connection to 127.0.0.1:9")


@pytest.fixture
def device():
    return FakeDevice([make_frame([1, 0, 2] + [0] * 13)])


@pytest.fixture
def board(device):
    return RelayBoard("127.0.0.1", 9, status_retries=10, retry_delay=0, connection_factory=device.factory)


@pytest_asyncio.fixture
async def client(board):
    """Create test HTTP client with the relay board replaced by a fake."""
    from app.main import app
    from app.core.dependencies.relays import get_notifier, get_relay_board

    async def override_board():
        return board

    async def override_notifier():
        return None

    app.dependency_overrides[get_relay_board] = override_board
    app.dependency_overrides[get_notifier] = override_notifier
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
