"""Base types and helpers for WebSocket message handlers."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from app.schemas.ws import (
    ErrorPayload,
    MessageType,
    WSClientMessage,
    WSServerMessage,
)

if TYPE_CHECKING:
    from app.services.game.match import MatchService
    from app.services.websocket.manager import ConnectionManager


@dataclass
class HandlerContext:
    """Context passed to each message handler."""

    connection_id: str
    message: WSClientMessage
    manager: "ConnectionManager"
    match: "MatchService"


@dataclass
class HandlerResult:
    """Result returned by message handlers.

    ``response`` goes to the requesting connection only. Broadcasts of
    accepted changes are published by the match service, not returned here.
    """

    success: bool
    response: WSServerMessage | None = None


def validate_payload[T: BaseModel](
    payload: dict | None,
    schema: type[T],
    request_id: str | None,
    error_type: MessageType,
    error_code: str = "VALIDATION_ERROR",
) -> tuple[T | None, HandlerResult | None]:
    """Validate payload against a Pydantic schema.

    Args:
        payload: The raw payload dict to validate.
        schema: The Pydantic model class to validate against.
        request_id: The request_id for error responses.
        error_type: The MessageType to use for error responses.
        error_code: The error code reported when validation fails.

    Returns:
        Tuple of (validated_payload, error_result). One will be None.
    """
    try:
        validated = schema.model_validate(payload or {})
        return validated, None
    except ValidationError as e:
        return None, error_response(
            error_code=error_code,
            message=str(e),
            error_type=error_type,
            request_id=request_id,
        )


def error_response(
    error_code: str,
    message: str,
    error_type: MessageType,
    request_id: str | None = None,
) -> HandlerResult:
    """Build an error HandlerResult."""
    return HandlerResult(
        success=False,
        response=WSServerMessage(
            type=error_type,
            request_id=request_id,
            payload=ErrorPayload(
                error_code=error_code,
                message=message,
            ).model_dump(),
        ),
    )
