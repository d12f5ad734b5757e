"""Path-sweep capture resolution and win detection."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

from app.schemas.game_engine import Character, MatchState, Side

from .board import clear, is_on_board, occupant_at, offset
from .events import CharacterCaptured
from .roster import remove_character


@dataclass
class SweepResult:
    """Result of sweeping a move's path."""

    captured: list[Character] = field(default_factory=list)
    events: list[CharacterCaptured] = field(default_factory=list)


def sweep_path(
    state: MatchState,
    mover: Character,
    dx: int,
    dy: int,
    move_range: int,
) -> SweepResult:
    """Capture every opposing character on the cells a move passes through.

    Walks ``move_range`` single steps from the mover's current position; the
    full range is always swept. Opposing occupants are removed from the board
    and from their side's roster. Mutates ``state`` in place, so callers pass
    a copy.

    Args:
        state: Match state copy to mutate.
        mover: The moving character, still at its origin.
        dx: Unit step along x.
        dy: Unit step along y.
        move_range: Number of steps to sweep.

    Returns:
        SweepResult with the captured characters and matching events.
    """
    result = SweepResult()

    for step in range(1, move_range + 1):
        pos = offset(mover.position, dx, dy, step)
        if not is_on_board(pos):
            continue

        occupant = occupant_at(state.board, pos)
        if occupant is None or occupant.side == mover.side:
            continue

        captured_side = state.sides[occupant.side]
        removed = remove_character(captured_side, occupant.character_id)
        if removed is None:
            logger.warning(
                "Board occupant %s at (%d, %d) missing from roster of side %s",
                occupant.character_id,
                pos.x,
                pos.y,
                occupant.side.value,
            )
        clear(state.board, pos)

        logger.info(
            "Capture: %s took %s at (%d, %d), side %s has %d left",
            mover.character_id,
            occupant.character_id,
            pos.x,
            pos.y,
            occupant.side.value,
            captured_side.remaining_count,
        )
        result.captured.append(occupant)
        result.events.append(
            CharacterCaptured(
                capturing_side=mover.side,
                capturing_character_id=mover.character_id,
                captured_side=occupant.side,
                captured_character_id=occupant.character_id,
                position=pos,
                remaining_count=captured_side.remaining_count,
            )
        )

    return result


def check_win_condition(state: MatchState, captured_sides: set[Side]) -> Side | None:
    """Check whether a capture exhausted a side's roster.

    Only sides that just lost a character are considered, so a side that
    deployed nothing does not lose before anyone moves.

    Args:
        state: Match state after captures were applied.
        captured_sides: Sides that lost at least one character this move.

    Returns:
        The winning side, or None if no winner yet.
    """
    for side in captured_sides:
        remaining = state.sides[side].remaining_count
        logger.debug("Win check: side=%s, remaining=%d", side.value, remaining)
        if remaining <= 0:
            winner = side.opponent()
            logger.info("Winner detected: side=%s", winner.value)
            return winner
    return None
