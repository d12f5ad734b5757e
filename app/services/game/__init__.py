"""Game service module.

Provides:
- Match ownership and serialized action handling (match.py)
- Game engine processing (engine/)
"""

# Re-export from engine for convenience
from .engine import (
    DeployAction,
    GameAction,
    MoveAction,
    ProcessResult,
    process_action,
)
from .match import MatchService, get_match_service, initialize_match, set_match_service

__all__ = [
    # Match
    "MatchService",
    "get_match_service",
    "set_match_service",
    "initialize_match",
    # Engine
    "GameAction",
    "ProcessResult",
    "DeployAction",
    "MoveAction",
    "process_action",
]
