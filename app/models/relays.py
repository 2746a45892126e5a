"""
Relay data models.

This module defines Pydantic models for the relay API payloads and for the
events published to the notifier.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

ENABLE = "on"
DISABLE = "off"


class RelayState(BaseModel):
    """State of one relay output, derived from a status frame"""
    id: int = Field(..., description="Relay index, 0-15")
    state: int = Field(..., description="0 when off, 1 when on")


class RelaysResponse(BaseModel):
    relays: List[RelayState] = Field(default_factory=list, description="State of every relay on the board")
    warning: Optional[str] = Field(None, description="Set when the state change could not be published")


class SwitchRequest(BaseModel):
    """Body of a relay switch request"""
    id: int = Field(..., description="Relay index, 0-15")
    switch: str = Field("", description=f"'{ENABLE}' or '{DISABLE}'")


class BaseResponse(BaseModel):
    message: str


class NotifierMessage(BaseModel):
    topic: str = Field(..., description="Message bus topic")
    qos: int = Field(2, description="MQTT quality of service")
    retained: bool = Field(False, description="Whether the broker keeps the message")
    payload: str = Field(..., description="Line protocol payload")
