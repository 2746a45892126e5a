# app/core/dependencies/relays.py
from typing import Optional

from fastapi import Depends

from app.core.env_settings import EnvSettings, get_settings
from app.services.notifier import RelayNotifier
from app.services.relay_board import RelayBoard


async def get_relay_board(settings: EnvSettings = Depends(get_settings)) -> RelayBoard:
    """Dependency provider for the relay board service."""
    return RelayBoard(
        host=settings.HLK_SW16_HOST,
        port=settings.HLK_SW16_PORT,
        timeout=settings.HLK_SW16_TIMEOUT,
        status_retries=settings.STATUS_RETRIES,
        retry_delay=settings.STATUS_RETRY_DELAY,
    )


async def get_notifier(settings: EnvSettings = Depends(get_settings)) -> Optional[RelayNotifier]:
    """
    Dependency provider for the state change notifier.

    Returns None when no publish endpoint is configured.
    """
    if not settings.notifications_enabled:
        return None
    return RelayNotifier(
        host=settings.MQTT_SENDER_HOST,
        topic=settings.MQTT_TOPIC,
        measurement=settings.MQTT_MEASUREMENT,
        timeout=settings.NOTIFIER_TIMEOUT,
    )
