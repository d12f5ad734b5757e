"""Initial placement of a side's roster on its home row."""

import logging

logger = logging.getLogger(__name__)

from app.schemas.game_engine import (
    BOARD_SIZE,
    CharacterSpec,
    GamePhase,
    MatchState,
    Position,
    Side,
)

from .board import clear, occupant_at, place
from .events import (
    AnyGameEvent,
    CharactersDeployed,
    DeploymentSlotSkipped,
    PlayStarted,
    TurnChanged,
)
from .roster import create_character, parse_kind
from .validation import ProcessResult

HOME_ROWS: dict[Side, int] = {Side.A: 0, Side.B: BOARD_SIZE - 1}


def process_deploy(
    state: MatchState,
    side: Side,
    specs: list[CharacterSpec | None],
) -> ProcessResult:
    """Place a side's characters on consecutive columns of its home row.

    Entry ``i`` goes to column ``i``. Slots that cannot be filled (unknown
    kind, empty or malformed entry, column past the board edge, column
    already occupied) are dropped and reported as DeploymentSlotSkipped
    events; the character is never placed elsewhere.

    A side that has already deployed gets back the unchanged state with no
    events. When the second side finishes deploying the turn toggles and the
    match enters IN_PLAY.

    Args:
        state: Current match state.
        side: The deploying side.
        specs: Ordered deployment slots.

    Returns:
        ProcessResult with the new state and deployment events.
    """
    if state.sides[side].has_deployed:
        logger.info("Side %s has already deployed, ignoring request", side.value)
        return ProcessResult.ok(state)

    new_state = state.model_copy(deep=True)
    side_state = new_state.sides[side]
    row = HOME_ROWS[side]
    events: list[AnyGameEvent] = []

    # Clear this side's leftovers from its home row
    for x in range(BOARD_SIZE):
        pos = Position(x=x, y=row)
        occupant = occupant_at(new_state.board, pos)
        if occupant is not None and occupant.side == side:
            clear(new_state.board, pos)
    side_state.characters = [c for c in side_state.characters if c.position.y != row]

    placed_ids: list[str] = []
    for column, spec in enumerate(specs):
        raw_kind = spec.kind if spec is not None else None
        reason = _skip_reason(new_state, row, column, spec)
        if reason is not None:
            logger.debug(
                "Deployment slot skipped: side=%s, column=%d, kind=%s, reason=%s",
                side.value,
                column,
                raw_kind,
                reason,
            )
            events.append(
                DeploymentSlotSkipped(
                    side=side,
                    column=column,
                    requested_kind=raw_kind,
                    reason=reason,
                )
            )
            continue

        kind = parse_kind(raw_kind)
        pos = Position(x=column, y=row)
        character = create_character(kind, side, pos)
        place(new_state.board, pos, character)
        side_state.characters.append(character)
        placed_ids.append(character.character_id)

    side_state.remaining_count = len(side_state.characters)
    side_state.has_deployed = True
    events.insert(
        0,
        CharactersDeployed(side=side, row=row, character_ids=placed_ids),
    )
    logger.info(
        "Side %s deployed %d characters on row %d (%d slots skipped)",
        side.value,
        len(placed_ids),
        row,
        len(events) - 1,
    )

    if all(s.has_deployed for s in new_state.sides.values()):
        previous = new_state.current_turn
        new_state.current_turn = previous.opponent()
        new_state.phase = GamePhase.IN_PLAY
        events.append(PlayStarted(first_side=new_state.current_turn))
        events.append(
            TurnChanged(previous_side=previous, current_side=new_state.current_turn)
        )
        logger.info("Both sides deployed, side %s to move", new_state.current_turn.value)

    return ProcessResult.ok(new_state, events)


def _skip_reason(
    state: MatchState, row: int, column: int, spec: CharacterSpec | None
) -> str | None:
    """Return why a deployment slot cannot be filled, or None if it can."""
    raw_kind = spec.kind if spec is not None else None
    if column >= BOARD_SIZE:
        return "off_board"
    if spec is not None and spec.malformed:
        return "malformed_slot"
    if not raw_kind:
        return "empty_slot"
    if parse_kind(raw_kind) is None:
        return "unknown_kind"
    if occupant_at(state.board, Position(x=column, y=row)) is not None:
        return "column_occupied"
    return None
