"""Rule checks for deploy and move actions, plus the result types the engine returns.

validate_action() decides whether an action may be applied to a match;
ProcessResult carries either the new state and its events or an error code.

Validation always completes before any state is copied or changed, so a
rejected action never leaves a partially applied match behind.
"""

import logging
from dataclasses import dataclass, field

from app.schemas.game_engine import GamePhase, MatchState

from .actions import DeployAction, GameAction, MoveAction
from .events import AnyGameEvent
from .movement import compute_destination, find_acting_character, is_valid_destination

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Outcome of applying one action to a match.

    Rule violations are reported through error_code/error_message rather than
    raised, and a failed result never carries a state.
    """

    state: MatchState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: MatchState,
        events: list[AnyGameEvent] | None = None,
    ) -> "ProcessResult":
        """Accepted action: the successor state and the events it produced."""
        return cls(
            state=state,
            events=events or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: str, message: str) -> "ProcessResult":
        """Rejected action with a stable error code."""
        return cls(
            state=None,
            events=[],
            success=False,
            error_code=code,
            error_message=message,
        )

    @property
    def changed(self) -> bool:
        """True when the action was accepted and produced at least one event."""
        return self.success and bool(self.events)


@dataclass
class ValidationResult:
    """Result of validating an action before processing."""

    is_valid: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: str, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def validate_action(state: MatchState, action: GameAction) -> ValidationResult:
    """Validate an action before processing.

    Checks:
    - The match is not over
    - Moves only happen once both sides have deployed
    - A side asserted by the requester matches the current turn
    - The acting character exists and belongs to the side whose turn it is
    - The destination is on the board and not held by the mover's own side

    Deploy actions are always valid outside GAME_OVER; a repeated deploy is
    handled as a no-op during processing.

    Args:
        state: Current match state.
        action: The action to validate.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    action_type = type(action).__name__
    logger.debug(
        "Validating action: type=%s, phase=%s, turn=%s",
        action_type,
        state.phase.value,
        state.current_turn.value,
    )

    if state.game_over or state.phase == GamePhase.GAME_OVER:
        logger.warning("Validation failed: GAME_ALREADY_OVER, winner=%s", state.winner)
        return ValidationResult.error(
            "GAME_ALREADY_OVER",
            "Game has already finished",
        )

    if isinstance(action, DeployAction):
        logger.debug("DeployAction validated successfully for side %s", action.side.value)
        return ValidationResult.ok()

    if isinstance(action, MoveAction):
        if state.phase == GamePhase.AWAITING_DEPLOYMENT:
            logger.warning("Validation failed: DEPLOYMENT_INCOMPLETE")
            return ValidationResult.error(
                "DEPLOYMENT_INCOMPLETE",
                "Both sides must deploy before moving",
            )

        if action.side is not None and action.side != state.current_turn:
            logger.warning(
                "Validation failed: OUT_OF_TURN, current=%s, attempted=%s",
                state.current_turn.value,
                action.side.value,
            )
            return ValidationResult.error(
                "OUT_OF_TURN",
                "It's not your turn",
            )

        character = find_acting_character(state, action.kind)
        if character is None:
            logger.warning(
                "Validation failed: CHARACTER_NOT_FOUND, kind=%s, side=%s",
                action.kind,
                state.current_turn.value,
            )
            return ValidationResult.error(
                "CHARACTER_NOT_FOUND",
                "Character not found!",
            )

        if character.side != state.current_turn:
            logger.warning(
                "Validation failed: OUT_OF_TURN, character=%s owned by %s",
                character.character_id,
                character.side.value,
            )
            return ValidationResult.error(
                "OUT_OF_TURN",
                "It's not your turn",
            )

        destination = compute_destination(character, action.direction)
        if destination is None or not is_valid_destination(
            state.board, character, destination
        ):
            logger.warning(
                "Validation failed: INVALID_MOVE, character=%s, direction=%s, destination=%s",
                character.character_id,
                action.direction,
                destination,
            )
            return ValidationResult.error(
                "INVALID_MOVE",
                "Invalid move!",
            )

    logger.debug("Action validated successfully: type=%s", action_type)
    return ValidationResult.ok()
