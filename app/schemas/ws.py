from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    """WebSocket message types."""

    # Core
    PING = "ping"
    PONG = "pong"
    CONNECTED = "connected"
    ERROR = "error"

    # Game
    DEPLOY = "deploy"
    MOVE = "move"
    GAME_EVENTS = "game_events"
    GAME_STATE = "game_state"
    GAME_ERROR = "game_error"


class WSCloseCode:
    """WebSocket close codes (RFC 6455)."""

    NORMAL = 1000
    GOING_AWAY = 1001


class WSClientMessage(BaseModel):
    """Message sent from client to server."""

    type: MessageType
    request_id: str | None = None
    payload: dict[str, Any] | None = None


class WSServerMessage(BaseModel):
    """Message sent from server to client."""

    type: MessageType
    request_id: str | None = None
    payload: dict[str, Any] | None = None


# --- Payload schemas ---


class ConnectedPayload(BaseModel):
    """Payload for the 'connected' message."""

    connection_id: str
    server_id: str
    message: str = "Connection established"


class PongPayload(BaseModel):
    """Payload for the 'pong' message."""

    server_time: datetime = Field(default_factory=lambda: datetime.now())


class ErrorPayload(BaseModel):
    """Payload for transport-level ERROR messages."""

    error_code: str
    message: str


# --- Game payload schemas ---


class GameEventsPayload(BaseModel):
    """Payload for GAME_EVENTS messages to clients.

    Contains a list of events that occurred during action processing.
    Events are broadcast to every connection for animation/UI updates.
    """

    events: list[dict[str, Any]] = Field(
        ..., description="List of game events (serialized)"
    )


class GameStatePayload(BaseModel):
    """Payload for GAME_STATE messages to clients.

    Contains the full match state, sent on connect and after every accepted change.
    """

    state: dict[str, Any] = Field(..., description="Full match state (serialized)")


class GameErrorPayload(BaseModel):
    """Payload for GAME_ERROR messages to clients."""

    error_code: str
    message: str
