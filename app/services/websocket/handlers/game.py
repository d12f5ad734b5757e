"""Handlers for DEPLOY and MOVE messages."""

import logging

from pydantic import BaseModel

from app.schemas.ws import (
    GameErrorPayload,
    GameEventsPayload,
    GameStatePayload,
    MessageType,
    WSServerMessage,
)
from app.services.game.engine import DeployAction, MoveAction, ProcessResult

from . import handler
from .base import (
    HandlerContext,
    HandlerResult,
    validate_payload,
)

logger = logging.getLogger(__name__)


@handler(MessageType.DEPLOY)
async def handle_deploy(ctx: HandlerContext) -> HandlerResult:
    """Handle DEPLOY message by placing a side's roster on its home row.

    Malformed payloads are reported as INVALID_DEPLOYMENT. A repeated deploy
    for a side that already deployed is answered with the current state and
    nothing is broadcast.
    """
    return await _submit_action(ctx, DeployAction, "INVALID_DEPLOYMENT")


@handler(MessageType.MOVE)
async def handle_move(ctx: HandlerContext) -> HandlerResult:
    """Handle MOVE message by moving a character of the side whose turn it is.

    Malformed payloads are reported as INVALID_MOVE.
    """
    return await _submit_action(ctx, MoveAction, "INVALID_MOVE")


async def _submit_action(
    ctx: HandlerContext,
    schema: type[BaseModel],
    malformed_code: str,
) -> HandlerResult:
    """Validate the payload, apply it to the match and publish the change.

    Flow:
    1. Validate payload into a typed action
    2. Submit to the match service (serialized, commits on success)
    3. On a change broadcast the new state and its events to every connection,
       in commit order, before submit() returns
    4. On rejection answer the requester only
    """
    request_id = ctx.message.request_id
    action, validation_error = validate_payload(
        ctx.message.payload,
        schema,
        request_id,
        MessageType.GAME_ERROR,
        error_code=malformed_code,
    )
    if validation_error:
        logger.info(
            "Malformed %s payload from connection %s",
            ctx.message.type.value,
            ctx.connection_id,
        )
        return validation_error

    async def publish(committed: ProcessResult) -> None:
        for message in _change_messages(committed, request_id):
            await ctx.manager.broadcast(message)

    result: ProcessResult = await ctx.match.submit(action, publish=publish)

    if not result.success:
        logger.info(
            "Game action rejected for connection %s: %s - %s",
            ctx.connection_id,
            result.error_code,
            result.error_message,
        )
        return HandlerResult(
            success=False,
            response=WSServerMessage(
                type=MessageType.GAME_ERROR,
                request_id=request_id,
                payload=GameErrorPayload(
                    error_code=result.error_code or "PROCESSING_ERROR",
                    message=result.error_message or "Failed to process action",
                ).model_dump(),
            ),
        )

    if not result.changed:
        logger.debug("No-op action from connection %s, nothing to broadcast", ctx.connection_id)
        return HandlerResult(success=True, response=_state_message(result, request_id))

    logger.info(
        "Game action processed for connection %s: %d events",
        ctx.connection_id,
        len(result.events),
    )
    return HandlerResult(success=True)


def _state_message(result: ProcessResult, request_id: str | None) -> WSServerMessage:
    return WSServerMessage(
        type=MessageType.GAME_STATE,
        request_id=request_id,
        payload=GameStatePayload(state=result.state.model_dump(mode="json")).model_dump(),
    )


def _change_messages(result: ProcessResult, request_id: str | None) -> list[WSServerMessage]:
    """GAME_STATE followed by GAME_EVENTS for an accepted change."""
    serialized_events = [event.model_dump(mode="json") for event in result.events]
    return [
        _state_message(result, request_id),
        WSServerMessage(
            type=MessageType.GAME_EVENTS,
            request_id=request_id,
            payload=GameEventsPayload(events=serialized_events).model_dump(),
        ),
    ]
