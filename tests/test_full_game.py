"""End-to-end match flow driven through process_action only."""

from app.schemas.game_engine import MatchState, Position, Side
from app.services.game.engine import CharacterCaptured, DeployAction, MoveAction, process_action
from app.services.game.engine.board import occupant_at

from .conftest import ALL_PAWNS, STANDARD_ROSTER_A, assert_board_roster_agree, specs


def _play(state: MatchState, kind: str, direction: str) -> MatchState:
    result = process_action(state, MoveAction(kind=kind, direction=direction))
    assert result.success, (kind, direction, result.error_code)
    assert_board_roster_agree(result.state)
    return result.state


class TestOpeningToFirstCapture:
    """Deploy both sides, advance, and take a Pawn with the diagonal hero."""

    def test_hero2_takes_pawn_forward_right(self, new_match: MatchState):
        state = process_action(
            new_match, DeployAction(side=Side.A, characters=specs(*STANDARD_ROSTER_A))
        ).state
        state = process_action(state, DeployAction(side=Side.B, characters=specs(*ALL_PAWNS))).state
        assert state.current_turn == Side.B

        state = _play(state, "Pawn", "Forward")  # B: (0,4) -> (0,3)
        assert occupant_at(state.board, Position(x=0, y=3)).side == Side.B
        assert state.current_turn == Side.A

        state = _play(state, "Hero2", "BackLeft")  # A: (2,0) -> (0,2)
        state = _play(state, "Pawn", "Right")  # B: (0,3) -> (1,3)
        state = _play(state, "Pawn", "Backward")  # A: (0,0) -> (0,1)
        state = _play(state, "Pawn", "Forward")  # B: (1,3) -> (1,2)
        state = _play(state, "Pawn", "Forward")  # A: (0,1) -> (0,0)
        state = _play(state, "Pawn", "Forward")  # B: (1,2) -> (1,1)
        assert state.sides[Side.B].remaining_count == 5

        result = process_action(state, MoveAction(kind="Hero2", direction="ForwardRight"))

        assert result.success
        state = result.state
        assert state.sides[Side.B].remaining_count == 4
        assert occupant_at(state.board, Position(x=1, y=1)) is None
        assert occupant_at(state.board, Position(x=2, y=0)).character_id == "A_Hero2_2"
        captured = [e for e in result.events if isinstance(e, CharacterCaptured)]
        assert [e.captured_character_id for e in captured] == ["B_Pawn_0"]
        assert state.current_turn == Side.B
        assert_board_roster_agree(state)

    def test_unrecognized_direction_leaves_state_unchanged(self, deployed_match: MatchState):
        before = deployed_match.model_copy(deep=True)

        result = process_action(deployed_match, MoveAction(kind="Pawn", direction="Up"))

        assert result.error_code == "INVALID_MOVE"
        assert deployed_match == before
