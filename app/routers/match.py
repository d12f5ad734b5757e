import logging

from fastapi import APIRouter

from app.dependencies.match import CurrentMatch
from app.schemas.game_engine import MatchState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/match", tags=["match"])


@router.get("", response_model=MatchState)
async def get_match(match: CurrentMatch):
    """Get the current match snapshot."""
    state = match.state
    logger.info(
        "GET /match - phase: %s, turn: %s, event_seq: %d",
        state.phase.value,
        state.current_turn.value,
        state.event_seq,
    )
    return state
