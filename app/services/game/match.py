"""Authoritative match ownership and request serialization."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from app.schemas.game_engine import MatchState

from .engine import GameAction, ProcessResult, process_action

logger = logging.getLogger(__name__)

Publisher = Callable[[ProcessResult], Awaitable[None]]


def initialize_match() -> MatchState:
    """Create a fresh match: empty board, no side deployed, side A holds the turn."""
    state = MatchState()
    logger.info("Initialized new match")
    return state


class MatchService:
    """Owns one match state and applies actions to it one at a time.

    Each submit() runs validation, processing and the commit of the new state
    under an asyncio.Lock, so concurrent requests behave as if executed in
    arrival order. Accepted changes are handed to the caller's publisher
    under a second lock that is taken before the commit lock is released,
    so publications go out in commit order.
    """

    def __init__(self, state: MatchState | None = None):
        self._state = state if state is not None else initialize_match()
        self._lock = asyncio.Lock()
        self._publish_lock = asyncio.Lock()

    @property
    def state(self) -> MatchState:
        return self._state

    def snapshot(self) -> dict:
        """Serialized view of the current state for clients."""
        return self._state.model_dump(mode="json")

    async def submit(
        self, action: GameAction, publish: Publisher | None = None
    ) -> ProcessResult:
        """Apply an action atomically against the current state.

        Args:
            action: The deploy or move action to apply.
            publish: Called with the result when the action changed the match.
                Runs after the commit, one publication at a time, in commit order.

        Returns:
            The engine's ProcessResult. On success the service state has
            already been replaced by result.state.
        """
        async with self._lock:
            result = process_action(self._state, action)
            if result.success and result.state is not None:
                self._state = result.state
                logger.debug("Committed match state at event_seq=%d", self._state.event_seq)
            if publish is None or not result.changed:
                return result
            await self._publish_lock.acquire()

        try:
            await publish(result)
        finally:
            self._publish_lock.release()
        return result


# Global match instance (one match per process)
_match_service: MatchService | None = None


def get_match_service() -> MatchService:
    """Get the global MatchService instance."""
    global _match_service
    if _match_service is None:
        _match_service = MatchService()
    return _match_service


def set_match_service(service: MatchService) -> None:
    """Set the global MatchService instance."""
    global _match_service
    _match_service = service
