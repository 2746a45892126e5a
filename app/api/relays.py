import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies.relays import get_notifier, get_relay_board
from app.core.env_settings import EnvSettings, get_settings
from app.core.exceptions import (
    DeviceCloseError,
    DeviceCommandError,
    DeviceError,
    DeviceReadError,
    DeviceUnavailableError,
    NotificationError,
    StatusRetriesExhaustedError,
)
from app.models.relays import DISABLE, ENABLE, RelaysResponse, SwitchRequest
from app.services.notifier import RelayNotifier
from app.services.relay_board import RelayBoard

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Relay API"])


def validate_switch(request: SwitchRequest) -> None:
    """Reject any switch value other than the two the board understands."""
    if request.switch not in (ENABLE, DISABLE):
        raise ValueError(
            f"switch must be: '{ENABLE}' or '{DISABLE}'; body:{request.model_dump_json()}"
        )


def _status_code_for(error: DeviceError, read_status: int) -> int:
    if isinstance(error, DeviceUnavailableError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(error, DeviceCommandError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, DeviceReadError):
        return read_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("/status", response_model=RelaysResponse, response_model_exclude_none=True)
async def get_status(board: RelayBoard = Depends(get_relay_board)) -> RelaysResponse:
    """Read the state of all relays"""
    try:
        relays = await asyncio.to_thread(board.read_status)
    except StatusRetriesExhaustedError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except DeviceError as e:
        logger.error(f"Error reading relay status: {e}")
        raise HTTPException(
            status_code=_status_code_for(e, read_status=status.HTTP_400_BAD_REQUEST),
            detail=str(e),
        )
    return RelaysResponse(relays=relays)


@router.post("/relay", response_model=RelaysResponse, response_model_exclude_none=True)
async def switch_relay(
    request: SwitchRequest,
    board: RelayBoard = Depends(get_relay_board),
    notifier: Optional[RelayNotifier] = Depends(get_notifier),
    settings: EnvSettings = Depends(get_settings),
) -> RelaysResponse:
    """Turn one relay on or off and return the new state of every relay"""
    try:
        validate_switch(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        relays = await asyncio.to_thread(board.switch_relay, request.id, request.switch)
    except DeviceError as e:
        logger.error(f"Error switching relay {request.id} {request.switch}: {e}")
        raise HTTPException(
            status_code=_status_code_for(e, read_status=status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=str(e),
        )

    response = RelaysResponse(relays=relays)
    if notifier is None:
        return response

    try:
        await notifier.notify_switch(request.id, request.switch == ENABLE)
    except NotificationError as e:
        if settings.NOTIFIER_STRICT:
            logger.error(f"Relay {request.id} switched but notification failed: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
        logger.warning(f"Relay {request.id} switched but notification failed: {e}")
        response.warning = str(e)
    return response
