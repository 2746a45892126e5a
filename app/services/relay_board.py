import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List

from app.core.exceptions import DeviceCloseError, DeviceCommandError, StatusRetriesExhaustedError
from app.models.relays import DISABLE, ENABLE, RelayState
from app.services.hlk_sw16 import HlkSw16Connection
from app.services.relay_status import decode_relay_states, is_valid_frame

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[str, int, float], HlkSw16Connection]


class RelayBoard:
    """
    Blocking operations against one HLK-SW16 board.

    Every operation opens its own connection and releases it before
    returning, whether the operation succeeded or not.
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeout: float = 5.0,
        status_retries: int = 10,
        retry_delay: float = 0.001,
        connection_factory: ConnectionFactory = HlkSw16Connection,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.status_retries = status_retries
        self.retry_delay = retry_delay
        self._connection_factory = connection_factory

    @contextmanager
    def connection(self) -> Iterator[HlkSw16Connection]:
        """
        Open a connection for the duration of the block.

        A close failure is raised only when the block itself succeeded;
        otherwise it is logged and the original error propagates.
        """
        conn = self._connection_factory(self.host, self.port, self.timeout)
        conn.connect()
        try:
            yield conn
        except BaseException:
            try:
                conn.close()
            except DeviceCloseError as close_error:
                logger.warning(f"Ignoring close failure after error: {close_error}")
            raise
        else:
            conn.close()

    def read_status(self) -> List[RelayState]:
        """
        Read the state of every relay.

        Frames taken while the board is mid-transition are discarded and the
        query is repeated up to ``status_retries`` times. Device errors are
        not retried.
        """
        for attempt in range(1, self.status_retries + 1):
            with self.connection() as conn:
                conn.status_relays()
                frame = conn.read_message()
            if is_valid_frame(frame):
                return decode_relay_states(frame)
            logger.warning(
                f"Unsettled status frame from {self.host}:{self.port} "
                f"(attempt {attempt}/{self.status_retries}): {frame.hex()}"
            )
            if attempt < self.status_retries:
                time.sleep(self.retry_delay)
        logger.error(f"No settled status frame after {self.status_retries} attempts")
        raise StatusRetriesExhaustedError()

    def switch_relay(self, relay_id: int, switch: str) -> List[RelayState]:
        """Turn one relay on or off and return the resulting state of the board."""
        with self.connection() as conn:
            if switch == ENABLE:
                conn.relay_on(relay_id)
            elif switch == DISABLE:
                conn.relay_off(relay_id)
            else:
                raise DeviceCommandError(f"unknown switch value: {switch!r}")
            frame = conn.read_message()
        logger.info(f"Relay {relay_id} switched {switch}")
        return decode_relay_states(frame)
