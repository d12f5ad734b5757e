"""Game event types - emitted during state transitions for WebSocket broadcasts.

Events describe what happened during a game action, enabling:
- Efficient WebSocket updates (only send what changed)
- Frontend animations (know exactly what moved or was captured)
- Visibility into deployment slots that were silently dropped
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from app.schemas.game_engine import CharacterKind, Position, Side


class GameEvent(BaseModel):
    """Base class for all game events."""

    event_type: str
    seq: int = 0  # Sequence number assigned during processing


class CharactersDeployed(GameEvent):
    """A side placed its roster on its home row."""

    event_type: Literal["characters_deployed"] = "characters_deployed"
    side: Side
    row: int
    character_ids: list[str]


class DeploymentSlotSkipped(GameEvent):
    """A requested deployment slot was dropped without placing a character."""

    event_type: Literal["deployment_slot_skipped"] = "deployment_slot_skipped"
    side: Side
    column: int
    requested_kind: str | None = None
    reason: str = Field(
        ...,
        description="Why the slot was dropped: 'unknown_kind', 'empty_slot', "
        "'malformed_slot', 'column_occupied', 'off_board'",
    )


class PlayStarted(GameEvent):
    """Both sides have deployed; alternating play begins."""

    event_type: Literal["play_started"] = "play_started"
    first_side: Side


class CharacterMoved(GameEvent):
    """A character was relocated on the board."""

    event_type: Literal["character_moved"] = "character_moved"
    side: Side
    character_id: str
    kind: CharacterKind
    direction: str
    from_position: Position
    to_position: Position


class CharacterCaptured(GameEvent):
    """An opposing character was swept off the board."""

    event_type: Literal["character_captured"] = "character_captured"
    capturing_side: Side
    capturing_character_id: str
    captured_side: Side
    captured_character_id: str
    position: Position
    remaining_count: int = Field(
        ..., description="Captured side's remaining characters after the capture"
    )


class TurnChanged(GameEvent):
    """The turn passed to the other side."""

    event_type: Literal["turn_changed"] = "turn_changed"
    previous_side: Side
    current_side: Side


class GameEnded(GameEvent):
    """The game has finished."""

    event_type: Literal["game_ended"] = "game_ended"
    winner: Side
    loser: Side


# Union of all event types for type checking
AnyGameEvent = Annotated[
    CharactersDeployed
    | DeploymentSlotSkipped
    | PlayStarted
    | CharacterMoved
    | CharacterCaptured
    | TurnChanged
    | GameEnded,
    Field(discriminator="event_type"),
]
