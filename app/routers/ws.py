import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from starlette.websockets import WebSocketState

from app.config import get_settings
from app.schemas.ws import (
    ErrorPayload,
    GameStatePayload,
    MessageType,
    WSClientMessage,
    WSServerMessage,
)
from app.services.game.match import get_match_service
from app.services.websocket.handlers import HandlerContext, dispatch
from app.services.websocket.manager import get_connection_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


def _error_message(error_code: str, message: str) -> WSServerMessage:
    return WSServerMessage(
        type=MessageType.ERROR,
        payload=ErrorPayload(error_code=error_code, message=message).model_dump(),
    )


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for real-time match updates.

    Clients connect with: ws://host/api/v1/ws

    On connect the server sends a 'connected' message followed by the current
    'game_state'. Afterwards every accepted deploy/move is pushed to all
    connections as 'game_state' + 'game_events'; rejections go to the
    requester only as 'game_error'.
    """
    settings = get_settings()
    max_message_size = settings.WS_MAX_MESSAGE_SIZE

    await websocket.accept()

    manager = get_connection_manager()
    match = get_match_service()
    connection = await manager.connect(websocket)

    # Initial handshake snapshot
    await manager.send_to_connection(
        connection.connection_id,
        WSServerMessage(
            type=MessageType.GAME_STATE,
            payload=GameStatePayload(state=match.snapshot()).model_dump(),
        ),
    )

    try:
        while True:
            if websocket.client_state != WebSocketState.CONNECTED:
                logger.debug("WebSocket no longer connected, exiting loop")
                break

            try:
                message_data = await websocket.receive()
            except Exception as e:
                logger.debug("Error receiving message: %s", e)
                break

            if message_data.get("type") == "websocket.disconnect":
                break

            raw_text = message_data.get("text")
            raw_bytes = message_data.get("bytes")

            if raw_text:
                message_size = len(raw_text.encode("utf-8"))
            elif raw_bytes:
                message_size = len(raw_bytes)
            else:
                continue

            if message_size > max_message_size:
                logger.warning(
                    "Message too large from connection %s: %d bytes (max %d)",
                    connection.connection_id,
                    message_size,
                    max_message_size,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    _error_message(
                        "MESSAGE_TOO_LARGE",
                        f"Message exceeds maximum size of {max_message_size} bytes",
                    ),
                )
                continue

            if not raw_text:
                continue

            try:
                data = json.loads(raw_text)
            except json.JSONDecodeError:
                logger.warning("Invalid JSON from connection %s", connection.connection_id)
                await manager.send_to_connection(
                    connection.connection_id,
                    _error_message("INVALID_JSON", "Invalid JSON format"),
                )
                continue

            try:
                message = WSClientMessage.model_validate(data)
            except ValidationError as e:
                logger.warning(
                    "Invalid message from connection %s: %s",
                    connection.connection_id,
                    e,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    _error_message("INVALID_MESSAGE", "Invalid message format"),
                )
                continue

            ctx = HandlerContext(
                connection_id=connection.connection_id,
                message=message,
                manager=manager,
                match=match,
            )

            result = await dispatch(ctx)

            if result is None:
                logger.debug(
                    "Unhandled message type %s from connection %s",
                    message.type,
                    connection.connection_id,
                )
                continue

            if result.response:
                await manager.send_to_connection(connection.connection_id, result.response)

    except WebSocketDisconnect as e:
        logger.info(
            "WS disconnected: connection %s, code %s",
            connection.connection_id,
            e.code,
        )
    except Exception as e:
        logger.error(
            "WS error for connection %s: %s",
            connection.connection_id,
            e,
        )
    finally:
        await manager.disconnect(connection.connection_id)
