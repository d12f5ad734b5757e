"""Game engine module - pure functional game logic.

This module provides the core game engine with:
- Action types for explicit user inputs (deploy, move)
- Event types for WebSocket broadcasts
- ProcessResult pattern for error handling
- Modular processing logic (board, roster, deployment, movement, captures)

Usage:
    from app.services.game.engine import (
        process_action,
        ProcessResult,
        DeployAction,
        MoveAction,
    )

    # Process an action
    result = process_action(state, MoveAction(kind="Hero2", direction="ForwardRight"))

    if result.success:
        new_state = result.state
        events = result.events  # Broadcast these via WebSocket
    else:
        # Handle error
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - explicit user inputs
from .actions import (
    DeployAction,
    GameAction,
    MoveAction,
)

# Board helpers
from .board import is_on_board, occupant_at

# Captures
from .captures import check_win_condition

# Events - for WebSocket broadcasts
from .events import (
    AnyGameEvent,
    CharacterCaptured,
    CharacterMoved,
    CharactersDeployed,
    DeploymentSlotSkipped,
    GameEnded,
    GameEvent,
    PlayStarted,
    TurnChanged,
)

# Movement
from .movement import Direction, compute_destination, parse_direction

# Main processing
from .process import process_action

# Roster
from .roster import CHARACTER_PROFILES, get_profile

# Result types
from .validation import ProcessResult, ValidationResult, validate_action

__all__ = [
    # Actions
    "GameAction",
    "DeployAction",
    "MoveAction",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "CharactersDeployed",
    "DeploymentSlotSkipped",
    "PlayStarted",
    "CharacterMoved",
    "CharacterCaptured",
    "TurnChanged",
    "GameEnded",
    # Processing
    "process_action",
    "check_win_condition",
    # Validation
    "ProcessResult",
    "ValidationResult",
    "validate_action",
    # Board, roster and movement
    "is_on_board",
    "occupant_at",
    "CHARACTER_PROFILES",
    "get_profile",
    "Direction",
    "compute_destination",
    "parse_direction",
]
