from app.services.websocket.handlers import HandlerContext, HandlerResult, dispatch, handler
from app.services.websocket.manager import (
    Connection,
    ConnectionManager,
    get_connection_manager,
    set_connection_manager,
)

__all__ = [
    "Connection",
    "ConnectionManager",
    "HandlerContext",
    "HandlerResult",
    "dispatch",
    "get_connection_manager",
    "handler",
    "set_connection_manager",
]
