"""Direction parsing and destination calculation for character moves."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

from app.schemas.game_engine import Character, MatchState, MovementStyle, Position

from .board import Board, is_on_board, occupant_at, offset
from .roster import find_character, get_profile, parse_kind


class Direction(str, Enum):
    FORWARD = "Forward"
    BACKWARD = "Backward"
    LEFT = "Left"
    RIGHT = "Right"
    FORWARD_LEFT = "ForwardLeft"
    FORWARD_RIGHT = "ForwardRight"
    BACK_LEFT = "BackLeft"
    BACK_RIGHT = "BackRight"


# Short tokens used by the browser client
DIRECTION_ALIASES: dict[str, Direction] = {
    "F": Direction.FORWARD,
    "B": Direction.BACKWARD,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
    "FL": Direction.FORWARD_LEFT,
    "FR": Direction.FORWARD_RIGHT,
    "BL": Direction.BACK_LEFT,
    "BR": Direction.BACK_RIGHT,
}

# Unit steps (dx, dy) per style. Forward is toward row 0 for both sides.
DIRECTION_VECTORS: dict[MovementStyle, dict[Direction, tuple[int, int]]] = {
    MovementStyle.ORTHOGONAL: {
        Direction.FORWARD: (0, -1),
        Direction.BACKWARD: (0, 1),
        Direction.LEFT: (-1, 0),
        Direction.RIGHT: (1, 0),
    },
    MovementStyle.DIAGONAL: {
        Direction.FORWARD_LEFT: (-1, -1),
        Direction.FORWARD_RIGHT: (1, -1),
        Direction.BACK_LEFT: (-1, 1),
        Direction.BACK_RIGHT: (1, 1),
    },
}


def parse_direction(raw: str) -> Direction | None:
    if raw in DIRECTION_ALIASES:
        return DIRECTION_ALIASES[raw]
    try:
        return Direction(raw)
    except ValueError:
        return None


def direction_vector(character: Character, raw_direction: str) -> tuple[int, int] | None:
    """Unit step for a direction token, or None if the token doesn't fit the kind's style."""
    direction = parse_direction(raw_direction)
    if direction is None:
        return None
    style = get_profile(character.kind).style
    return DIRECTION_VECTORS[style].get(direction)


def compute_destination(character: Character, raw_direction: str) -> Position | None:
    """Where a character lands when moving its full range in a direction.

    Returns:
        The destination (possibly off-board), or None for an unrecognized
        direction or one outside the character's movement style.
    """
    vector = direction_vector(character, raw_direction)
    if vector is None:
        logger.debug(
            "No destination: character=%s, direction=%s", character.character_id, raw_direction
        )
        return None
    dx, dy = vector
    return offset(character.position, dx, dy, get_profile(character.kind).move_range)


def is_valid_destination(board: Board, character: Character, destination: Position) -> bool:
    if not is_on_board(destination):
        return False
    occupant = occupant_at(board, destination)
    return occupant is None or occupant.side != character.side


def find_acting_character(state: MatchState, raw_kind: str) -> Character | None:
    """Resolve the character to move from the roster of the side whose turn it is."""
    kind = parse_kind(raw_kind)
    if kind is None:
        return None
    return find_character(state.sides[state.current_turn], kind)
