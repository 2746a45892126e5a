"""
HLK-SW16 TCP client.

Speaks the board's fixed 20 byte frame protocol. Commands are framed as
0xAA <command, zero padded to 17 bytes> 0x0B 0xBB and every response is a
single 20 byte frame (0xCC ... 0xDD) that is handed back unparsed.
"""
import logging
import socket
from typing import Optional

from app.core.exceptions import (
    DeviceCloseError,
    DeviceCommandError,
    DeviceReadError,
    DeviceUnavailableError,
)

logger = logging.getLogger(__name__)

FRAME_LENGTH = 20
FRAME_HEADER = b"\xaa"
FRAME_VERIFY = b"\x0b"
FRAME_DELIMITER = b"\xbb"
COMMAND_LENGTH = 17

CMD_STATUS = b"\x1e"
CMD_SWITCH = b"\x10"
SWITCH_ON = b"\x01"
SWITCH_OFF = b"\x02"

RELAY_COUNT = 16


def format_packet(command: bytes) -> bytes:
    """Wrap a command in the board's request framing."""
    if len(command) > COMMAND_LENGTH:
        raise DeviceCommandError(f"command too long: {len(command)} bytes")
    return FRAME_HEADER + command.ljust(COMMAND_LENGTH, b"\x00") + FRAME_VERIFY + FRAME_DELIMITER


class HlkSw16Connection:
    """
    One TCP session with the relay board.

    Usage:
        with HlkSw16Connection(host, port) as conn:
            conn.status_relays()
            frame = conn.read_message()
    """

    def __init__(self, host: str, port: int, timeout: float = 5.0) -> None:
        self.host = host
        self.port = int(port)
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        try:
            self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise DeviceUnavailableError(f"cannot connect to {self.address}: {e}") from e
        logger.debug(f"Connected to relay board at {self.address}")

    def _send(self, command: bytes) -> None:
        if self._sock is None:
            raise DeviceCommandError(f"not connected to {self.address}")
        packet = format_packet(command)
        try:
            self._sock.sendall(packet)
        except OSError as e:
            raise DeviceCommandError(f"cannot send command to {self.address}: {e}") from e
        logger.debug(f"Sent {packet.hex()} to {self.address}")

    def _switch(self, relay_id: int, value: bytes) -> None:
        if not 0 <= relay_id < RELAY_COUNT:
            raise DeviceCommandError(f"relay id must be between 0 and {RELAY_COUNT - 1}, got {relay_id}")
        self._send(CMD_SWITCH + bytes([relay_id]) + value)

    def relay_on(self, relay_id: int) -> None:
        self._switch(relay_id, SWITCH_ON)

    def relay_off(self, relay_id: int) -> None:
        self._switch(relay_id, SWITCH_OFF)

    def status_relays(self) -> None:
        """Ask the board to report the state of every relay."""
        self._send(CMD_STATUS)

    def read_message(self) -> bytes:
        """Read exactly one response frame."""
        if self._sock is None:
            raise DeviceReadError(f"not connected to {self.address}")
        buffer = bytearray()
        try:
            while len(buffer) < FRAME_LENGTH:
                chunk = self._sock.recv(FRAME_LENGTH - len(buffer))
                if not chunk:
                    raise DeviceReadError(
                        f"connection to {self.address} closed after {len(buffer)} of {FRAME_LENGTH} bytes"
                    )
                buffer.extend(chunk)
        except OSError as e:
            raise DeviceReadError(f"cannot read from {self.address}: {e}") from e
        logger.debug(f"Received {buffer.hex()} from {self.address}")
        return bytes(buffer)

    def close(self) -> None:
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        try:
            sock.close()
        except OSError as e:
            raise DeviceCloseError(f"cannot close connection to {self.address}: {e}") from e

    def __enter__(self) -> "HlkSw16Connection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
            return False
        try:
            self.close()
        except DeviceCloseError as close_error:
            logger.warning(f"Ignoring close failure after error: {close_error}")
        return False
