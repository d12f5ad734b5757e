import asyncio
import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import WebSocket

from app.config import get_settings
from app.schemas.ws import (
    ConnectedPayload,
    MessageType,
    WSCloseCode,
    WSServerMessage,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Connection:
    """A client watching the match."""

    connection_id: str
    websocket: WebSocket
    connected_at: datetime = field(default_factory=_utcnow)
    last_heartbeat: datetime = field(default_factory=_utcnow)

    def idle_seconds(self, now: datetime) -> float:
        return (now - self.last_heartbeat).total_seconds()


class ConnectionManager:
    """Tracks the WebSocket connections watching the match on this server.

    There is a single audience: every accepted game change is fanned out to
    all tracked connections, and rejections are sent to one connection only.
    """

    def __init__(self, server_id: str | None = None):
        self._server_id = server_id or os.getenv("HOSTNAME", str(uuid.uuid4())[:8])
        self._settings = get_settings()
        self._connections: dict[str, Connection] = {}
        self._cleanup_task: asyncio.Task | None = None

        logger.info("ConnectionManager initialized with server_id: %s", self._server_id)

    @property
    def server_id(self) -> str:
        return self._server_id

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def get_connection(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    async def connect(self, websocket: WebSocket) -> Connection:
        """Track an accepted WebSocket and send it the CONNECTED greeting.

        Args:
            websocket: A WebSocket that has already been accepted.

        Returns:
            The new Connection.
        """
        connection = Connection(connection_id=str(uuid.uuid4()), websocket=websocket)
        self._connections[connection.connection_id] = connection
        logger.info(
            "Connection %s opened (%d watching)",
            connection.connection_id,
            self.connection_count,
        )

        greeting = ConnectedPayload(
            connection_id=connection.connection_id,
            server_id=self._server_id,
        )
        await self.send_to_connection(
            connection.connection_id,
            WSServerMessage(type=MessageType.CONNECTED, payload=greeting.model_dump()),
        )
        return connection

    async def disconnect(self, connection_id: str) -> None:
        """Forget a connection. Unknown ids are ignored."""
        if self._connections.pop(connection_id, None) is None:
            logger.debug("Disconnect for unknown connection %s", connection_id)
            return
        logger.info("Connection %s closed (%d watching)", connection_id, self.connection_count)

    async def heartbeat(self, connection_id: str) -> None:
        connection = self._connections.get(connection_id)
        if connection:
            connection.last_heartbeat = _utcnow()

    async def send_to_connection(self, connection_id: str, message: WSServerMessage) -> bool:
        """Send one message to one connection.

        A connection whose socket fails to send is dropped.

        Returns:
            True if the message was written to the socket.
        """
        connection = self._connections.get(connection_id)
        if connection is None:
            logger.debug("Cannot send %s to unknown connection %s", message.type.value, connection_id)
            return False

        try:
            await connection.websocket.send_json(message.model_dump(mode="json"))
        except Exception as e:
            logger.warning("Send to connection %s failed: %s", connection_id, e)
            await self.disconnect(connection_id)
            return False
        return True

    async def broadcast(self, message: WSServerMessage) -> int:
        """Send a message to every connection.

        Returns:
            Number of connections that received it.
        """
        delivered = 0
        for connection_id in list(self._connections):
            if await self.send_to_connection(connection_id, message):
                delivered += 1
        logger.debug("Broadcast %s to %d connections", message.type.value, delivered)
        return delivered

    async def cleanup_stale_connections(self) -> int:
        """Close connections that have not sent a heartbeat within the timeout.

        Returns:
            Number of connections closed.
        """
        now = _utcnow()
        timeout = self._settings.WS_CONNECTION_TIMEOUT
        stale = [
            connection_id
            for connection_id, connection in list(self._connections.items())
            if connection.idle_seconds(now) > timeout
        ]

        for connection_id in stale:
            logger.warning("Connection %s idle for more than %ds", connection_id, timeout)
            await self._close(connection_id)

        if stale:
            logger.info("Cleaned up %d stale connections", len(stale))
        return len(stale)

    async def _cleanup_loop(self) -> None:
        interval = self._settings.WS_HEARTBEAT_INTERVAL
        logger.info("Starting cleanup task with interval %ds", interval)
        while True:
            try:
                await asyncio.sleep(interval)
                await self.cleanup_stale_connections()
            except asyncio.CancelledError:
                logger.info("Cleanup task cancelled")
                break
            except Exception as e:
                logger.error("Error in cleanup task: %s", e)

    async def start_cleanup_task(self) -> None:
        if self._cleanup_task is not None:
            logger.warning("Cleanup task already running")
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup_task(self) -> None:
        if self._cleanup_task is None:
            return
        self._cleanup_task.cancel()
        try:
            await self._cleanup_task
        except asyncio.CancelledError:
            pass
        self._cleanup_task = None
        logger.info("Cleanup task stopped")

    async def close_all_connections(self) -> None:
        logger.info("Closing all %d connections", self.connection_count)
        for connection_id in list(self._connections):
            await self._close(connection_id)

    async def _close(self, connection_id: str) -> None:
        connection = self._connections.get(connection_id)
        if connection:
            try:
                await connection.websocket.close(code=WSCloseCode.GOING_AWAY)
            except Exception as e:
                logger.debug("Error closing websocket %s: %s", connection_id, e)
        await self.disconnect(connection_id)


# Global manager instance (created on first use, normally in lifespan)
_connection_manager: ConnectionManager | None = None


def get_connection_manager() -> ConnectionManager:
    """Get the global ConnectionManager instance."""
    global _connection_manager
    if _connection_manager is None:
        _connection_manager = ConnectionManager()
    return _connection_manager


def set_connection_manager(manager: ConnectionManager) -> None:
    """Set the global ConnectionManager instance."""
    global _connection_manager
    _connection_manager = manager
