"""
Relay state change notifier.

Publishes relay changes to the message bus through the sender service's
HTTP publish endpoint. The sender answers 204 when the message was accepted.
"""
import logging
from typing import Optional

import httpx

from app.core.exceptions import NotificationError
from app.models.relays import NotifierMessage

logger = logging.getLogger(__name__)


class RelayNotifier:
    def __init__(
        self,
        host: str,
        topic: str = "home/sensors/relay",
        measurement: str = "relay",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.host = host
        self.topic = topic
        self.measurement = measurement
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"http://{self.host}/publish"

    def build_message(self, relay_id: int, state_on: bool) -> NotifierMessage:
        """Build the line protocol event for one relay."""
        value = "true" if state_on else "false"
        return NotifierMessage(
            topic=self.topic,
            qos=2,
            retained=False,
            payload=f"{self.measurement},id={relay_id} value={value}",
        )

    async def publish(self, message: NotifierMessage) -> None:
        """
        Send a message to the publish endpoint.

        Raises:
            NotificationError: on transport failure or any status other than 204
        """
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.url, json=message.model_dump())
        except httpx.HTTPError as e:
            raise NotificationError(f"cannot fetch URL {self.url!r}: {e}") from e
        except Exception as e:
            # bad sender host or port surfaces outside httpx.HTTPError
            raise NotificationError(f"cannot fetch URL {self.url!r}: {e!r}") from e
        if response.status_code != httpx.codes.NO_CONTENT:
            raise NotificationError(
                f"unexpected http POST status: {response.status_code} {response.reason_phrase}"
            )
        logger.info(f"Published to {message.topic}: {message.payload}")

    async def notify_switch(self, relay_id: int, state_on: bool) -> None:
        await self.publish(self.build_message(relay_id, state_on))
