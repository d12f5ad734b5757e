"""Main entry point for game action processing.

This module provides the primary interface for processing game actions:
- process_action(): Validates and processes any game action
- Dispatches to specialized handlers based on action type
- Returns ProcessResult with new state and events
"""

import logging

logger = logging.getLogger(__name__)

from app.schemas.game_engine import GamePhase, MatchState

from .actions import DeployAction, GameAction, MoveAction
from .board import clear, place
from .captures import check_win_condition, sweep_path
from .deployment import process_deploy
from .events import AnyGameEvent, CharacterMoved, GameEnded, TurnChanged
from .movement import compute_destination, direction_vector, find_acting_character
from .roster import get_profile
from .validation import ProcessResult, validate_action


def process_action(state: MatchState, action: GameAction) -> ProcessResult:
    """Process a game action and return the result.

    This is the main entry point for all game actions. It:
    1. Validates the action is legal given current state
    2. Dispatches to the appropriate handler
    3. Assigns sequence numbers to events
    4. Returns ProcessResult with new state and events

    The input state is never modified. A rejected action returns no state.

    Args:
        state: Current match state.
        action: The action to process.

    Returns:
        ProcessResult containing:
        - success: Whether the action was processed successfully
        - state: The new match state (if successful)
        - events: List of events that occurred (with seq numbers)
        - error_code/error_message: Error details (if failed)

    Example:
        >>> result = process_action(state, MoveAction(kind="Pawn", direction="Forward"))
        >>> if result.success:
        ...     new_state = result.state
        ... else:
        ...     send_error(result.error_code, result.error_message)
    """
    action_type = type(action).__name__
    logger.info(
        "Processing action: type=%s, phase=%s, turn=%s",
        action_type,
        state.phase.value,
        state.current_turn.value,
    )
    logger.debug("Action details: %s", action)

    validation = validate_action(state, action)
    if not validation.is_valid:
        logger.warning(
            "Action validation failed: code=%s, message=%s, action=%s",
            validation.error_code,
            validation.error_message,
            action_type,
        )
        return ProcessResult.failure(
            validation.error_code or "VALIDATION_ERROR",
            validation.error_message or "Invalid action",
        )

    if isinstance(action, DeployAction):
        result = process_deploy(state, action.side, action.characters)

    elif isinstance(action, MoveAction):
        result = process_move(state, action.kind, action.direction)

    else:
        logger.error("Unknown action type received: %s", action_type)
        return ProcessResult.failure(
            "UNKNOWN_ACTION",
            f"Unknown action type: {type(action).__name__}",
        )

    if result.success and result.state is not None:
        result = _assign_event_sequences(result)
        logger.info(
            "Action processed successfully: type=%s, events_generated=%d",
            action_type,
            len(result.events),
        )
        logger.debug("Generated events: %s", [type(e).__name__ for e in result.events])

    return result


def _assign_event_sequences(result: ProcessResult) -> ProcessResult:
    """Assign monotonically increasing sequence numbers to events.

    Updates each event's seq field and increments the state's event_seq counter.
    """
    if result.state is None or not result.events:
        return result

    current_seq = result.state.event_seq
    for event in result.events:
        event.seq = current_seq
        current_seq += 1

    new_state = result.state.model_copy(update={"event_seq": current_seq})

    return ProcessResult.ok(new_state, result.events)


def process_move(state: MatchState, kind: str, direction: str) -> ProcessResult:
    """Move the current side's character and resolve captures.

    Expects an action that already passed validate_action. Non-Pawn kinds
    sweep their full range first; Pawns only relocate, so a Pawn landing on
    an opposing character overwrites the board cell without capturing it.
    The turn toggles after every accepted move, including the winning one.

    Args:
        state: Current match state (IN_PLAY).
        kind: Kind of the character to move.
        direction: Direction token.

    Returns:
        ProcessResult with the new state and move, capture and turn events.
    """
    new_state = state.model_copy(deep=True)
    mover_side = new_state.current_turn
    events: list[AnyGameEvent] = []

    character = find_acting_character(new_state, kind)
    destination = compute_destination(character, direction)
    dx, dy = direction_vector(character, direction)
    profile = get_profile(character.kind)
    origin = character.position

    captured_sides = set()
    if profile.sweeps:
        sweep = sweep_path(new_state, character, dx, dy, profile.move_range)
        events.extend(sweep.events)
        captured_sides = {c.side for c in sweep.captured}

    moved = character.model_copy(update={"position": destination})
    clear(new_state.board, origin)
    place(new_state.board, destination, moved)
    roster = new_state.sides[mover_side]
    roster.characters = [
        moved if c.character_id == moved.character_id else c for c in roster.characters
    ]
    events.insert(
        0,
        CharacterMoved(
            side=mover_side,
            character_id=moved.character_id,
            kind=moved.kind,
            direction=direction,
            from_position=origin,
            to_position=destination,
        ),
    )
    logger.info(
        "Moved %s from (%d, %d) to (%d, %d)",
        moved.character_id,
        origin.x,
        origin.y,
        destination.x,
        destination.y,
    )

    winner = check_win_condition(new_state, captured_sides)
    if winner is not None:
        new_state.game_over = True
        new_state.winner = winner
        new_state.phase = GamePhase.GAME_OVER
        events.append(GameEnded(winner=winner, loser=winner.opponent()))
        logger.info("Game over: side %s wins", winner.value)

    new_state.current_turn = mover_side.opponent()
    events.append(TurnChanged(previous_side=mover_side, current_side=new_state.current_turn))

    return ProcessResult.ok(new_state, events)
