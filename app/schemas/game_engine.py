from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)

BOARD_SIZE = 5


# Game phases
class GamePhase(str, Enum):
    AWAITING_DEPLOYMENT = "awaiting_deployment"
    IN_PLAY = "in_play"
    GAME_OVER = "game_over"


class Side(str, Enum):
    A = "A"
    B = "B"

    def opponent(self) -> "Side":
        return Side.B if self == Side.A else Side.A


class CharacterKind(str, Enum):
    PAWN = "Pawn"
    HERO1 = "Hero1"
    HERO2 = "Hero2"


class MovementStyle(str, Enum):
    ORTHOGONAL = "orthogonal"
    DIAGONAL = "diagonal"


class MovementProfile(BaseModel):
    move_range: int = Field(..., ge=1)
    style: MovementStyle
    sweeps: bool = True  # Whether the move captures along its path


# Data models for game entities
class Position(BaseModel):
    x: int
    y: int


class Character(BaseModel):
    character_id: str
    kind: CharacterKind
    side: Side
    position: Position


class SideState(BaseModel):
    characters: list[Character] = []
    remaining_count: int = 0
    has_deployed: bool = False


class CharacterSpec(BaseModel):
    """One requested deployment slot. Unknown kinds are kept as raw strings.

    ``malformed`` marks an entry that could not be read as a slot at all; it
    still occupies its column index.
    """

    kind: str | None = Field(None, validation_alias=AliasChoices("kind", "type"))
    malformed: bool = Field(False, exclude=True)


def empty_board() -> list[list[Character | None]]:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


# Match state for broadcasting and game flow
class MatchState(BaseModel):
    """Authoritative state of a single match.

    The board is indexed ``board[y][x]``. Engine operations never mutate a
    MatchState in place; they return a new one. Serialized snapshots omit
    ``winner`` until the game is over.
    """

    phase: GamePhase = GamePhase.AWAITING_DEPLOYMENT
    board: list[list[Character | None]] = Field(default_factory=empty_board)
    sides: dict[Side, SideState] = Field(
        default_factory=lambda: {Side.A: SideState(), Side.B: SideState()}
    )
    current_turn: Side = Side.A
    game_over: bool = False
    winner: Side | None = None
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)

    @model_serializer(mode="wrap")
    def _omit_unset_winner(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.winner is None:
            data.pop("winner", None)
        return data
