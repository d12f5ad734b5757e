"""Routes client messages to the handler registered for their type.

Handlers live in sibling modules and register themselves with @handler on import."""

import logging
from collections.abc import Awaitable, Callable

from app.schemas.ws import MessageType

from .base import HandlerContext, HandlerResult

logger = logging.getLogger(__name__)

HandlerFunc = Callable[[HandlerContext], Awaitable[HandlerResult]]

_handlers: dict[MessageType, HandlerFunc] = {}


def handler(message_type: MessageType) -> Callable[[HandlerFunc], HandlerFunc]:
    """Register the decorated coroutine as the handler for message_type."""

    def decorator(func: HandlerFunc) -> HandlerFunc:
        if message_type in _handlers:
            logger.warning(
                "Overwriting existing handler for %s",
                message_type,
            )
        _handlers[message_type] = func
        logger.debug("Registered handler for %s: %s", message_type, func.__name__)
        return func

    return decorator


async def dispatch(ctx: HandlerContext) -> HandlerResult | None:
    """Run the handler for ctx.message.type; None when no handler is registered."""
    handler_func = _handlers.get(ctx.message.type)
    if handler_func is None:
        logger.debug(
            "No handler registered for message type %s from connection %s",
            ctx.message.type,
            ctx.connection_id,
        )
        return None

    return await handler_func(ctx)


# Registration side effects
from . import game  # noqa: E402, F401
from . import ping  # noqa: E402, F401

__all__ = [
    "HandlerContext",
    "HandlerResult",
    "dispatch",
    "handler",
]
