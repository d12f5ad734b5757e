"""Shared fixtures and state builders for game engine tests."""

import pytest

from app.schemas.game_engine import (
    Character,
    CharacterKind,
    CharacterSpec,
    GamePhase,
    MatchState,
    Position,
    Side,
    SideState,
    empty_board,
)
from app.services.game.engine import DeployAction, process_action
from app.services.game.engine.board import occupant_at

STANDARD_ROSTER_A = ["Pawn", "Hero1", "Hero2", "Pawn", "Pawn"]
ALL_PAWNS = ["Pawn"] * 5


def specs(*kinds: str | None) -> list[CharacterSpec | None]:
    """Build deployment slots from kind names; None stays an empty slot."""
    return [CharacterSpec(kind=k) if k is not None else None for k in kinds]


def create_character(kind: CharacterKind, side: Side, x: int, y: int) -> Character:
    """Helper to create a character with a predictable id."""
    return Character(
        character_id=f"{side.value}_{kind.value}_{x}{y}",
        kind=kind,
        side=side,
        position=Position(x=x, y=y),
    )


def build_state(
    characters: list[Character],
    current_turn: Side = Side.A,
    phase: GamePhase = GamePhase.IN_PLAY,
) -> MatchState:
    """Build a deployed match with characters at arbitrary positions.

    Board and rosters are filled from the same list so they agree.
    """
    board = empty_board()
    sides = {Side.A: SideState(has_deployed=True), Side.B: SideState(has_deployed=True)}
    for character in characters:
        board[character.position.y][character.position.x] = character
        sides[character.side].characters.append(character)
    for side_state in sides.values():
        side_state.remaining_count = len(side_state.characters)
    return MatchState(
        phase=phase,
        board=board,
        sides=sides,
        current_turn=current_turn,
    )


def assert_board_roster_agree(state: MatchState) -> None:
    """Every live character sits on its own cell and counts match rosters."""
    for side, side_state in state.sides.items():
        assert side_state.remaining_count == len(side_state.characters)
        for character in side_state.characters:
            assert character.side == side
            assert occupant_at(state.board, character.position) == character

    on_board = [cell for row in state.board for cell in row if cell is not None]
    ids = [c.character_id for c in on_board]
    assert len(ids) == len(set(ids))


@pytest.fixture
def new_match() -> MatchState:
    """Fresh match awaiting deployment."""
    return MatchState()


@pytest.fixture
def deployed_match(new_match: MatchState) -> MatchState:
    """A deploys the standard roster, B deploys five Pawns; B to move."""
    result = process_action(
        new_match, DeployAction(side=Side.A, characters=specs(*STANDARD_ROSTER_A))
    )
    assert result.success
    result = process_action(
        result.state, DeployAction(side=Side.B, characters=specs(*ALL_PAWNS))
    )
    assert result.success
    return result.state
