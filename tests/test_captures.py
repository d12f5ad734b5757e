"""Tests for capture scenarios.

Critical scenarios tested:
- Heroes sweep their full range and capture every opponent on the path
- Diagonal heroes sweep diagonally
- Own characters on the path are left alone
- Pawns never capture, even when landing on an opponent
"""

from app.schemas.game_engine import CharacterKind, Position, Side
from app.services.game.engine import CharacterCaptured, MoveAction, process_action
from app.services.game.engine.board import occupant_at

from .conftest import assert_board_roster_agree, build_state, create_character


class TestPathSweep:
    """Test non-Pawn path captures."""

    def test_sweep_captures_intermediate_and_destination(self):
        """One move takes every opponent on the straight line."""
        hero = create_character(CharacterKind.HERO1, Side.A, 0, 0)
        near = create_character(CharacterKind.PAWN, Side.B, 0, 1)
        far = create_character(CharacterKind.PAWN, Side.B, 0, 2)
        spare = create_character(CharacterKind.PAWN, Side.B, 4, 4)
        state = build_state([hero, near, far, spare])

        result = process_action(state, MoveAction(kind="Hero1", direction="Backward"))

        assert result.success
        new_state = result.state
        assert new_state.sides[Side.B].remaining_count == 1
        assert new_state.sides[Side.B].characters == [spare]
        assert occupant_at(new_state.board, Position(x=0, y=1)) is None
        assert occupant_at(new_state.board, Position(x=0, y=2)).character_id == hero.character_id

        captures = [e for e in result.events if isinstance(e, CharacterCaptured)]
        assert [e.captured_character_id for e in captures] == [
            near.character_id,
            far.character_id,
        ]
        assert [e.remaining_count for e in captures] == [2, 1]
        assert_board_roster_agree(new_state)

    def test_sweep_captures_intermediate_with_empty_destination(self):
        hero = create_character(CharacterKind.HERO1, Side.A, 1, 2)
        victim = create_character(CharacterKind.PAWN, Side.B, 2, 2)
        spare = create_character(CharacterKind.PAWN, Side.B, 0, 4)
        state = build_state([hero, victim, spare])

        result = process_action(state, MoveAction(kind="Hero1", direction="Right"))

        assert result.success
        assert result.state.sides[Side.B].remaining_count == 1
        assert occupant_at(result.state.board, Position(x=2, y=2)) is None
        assert occupant_at(result.state.board, Position(x=3, y=2)).kind == CharacterKind.HERO1

    def test_diagonal_sweep(self):
        hero = create_character(CharacterKind.HERO2, Side.B, 1, 3)
        victim = create_character(CharacterKind.HERO1, Side.A, 2, 2)
        spare = create_character(CharacterKind.PAWN, Side.A, 0, 0)
        state = build_state([hero, victim, spare], current_turn=Side.B)

        result = process_action(state, MoveAction(kind="Hero2", direction="ForwardRight"))

        assert result.success
        assert result.state.sides[Side.A].characters == [spare]
        assert occupant_at(result.state.board, Position(x=3, y=1)).side == Side.B
        assert_board_roster_agree(result.state)

    def test_own_characters_on_path_are_not_captured(self):
        hero = create_character(CharacterKind.HERO1, Side.A, 0, 0)
        ally = create_character(CharacterKind.PAWN, Side.A, 0, 1)
        enemy = create_character(CharacterKind.PAWN, Side.B, 4, 4)
        state = build_state([hero, ally, enemy])

        result = process_action(state, MoveAction(kind="Hero1", direction="Backward"))

        assert result.success
        assert result.state.sides[Side.A].remaining_count == 2
        assert occupant_at(result.state.board, Position(x=0, y=1)) == ally
        assert not any(isinstance(e, CharacterCaptured) for e in result.events)

    def test_capturing_onto_opponent_cell(self):
        """Landing on an opponent is allowed for heroes and captures it."""
        hero = create_character(CharacterKind.HERO1, Side.A, 4, 0)
        victim = create_character(CharacterKind.HERO2, Side.B, 4, 2)
        spare = create_character(CharacterKind.PAWN, Side.B, 0, 4)
        state = build_state([hero, victim, spare])

        result = process_action(state, MoveAction(kind="Hero1", direction="Backward"))

        assert result.success
        assert occupant_at(result.state.board, Position(x=4, y=2)).character_id == hero.character_id
        assert result.state.sides[Side.B].remaining_count == 1


class TestPawnLanding:
    """Pin the Pawn landing rule: Pawns never sweep, so they never capture."""

    def test_pawn_landing_on_opponent_does_not_capture(self):
        pawn = create_character(CharacterKind.PAWN, Side.A, 2, 1)
        target = create_character(CharacterKind.PAWN, Side.B, 2, 2)
        spare = create_character(CharacterKind.PAWN, Side.B, 4, 4)
        state = build_state([pawn, target, spare])

        result = process_action(state, MoveAction(kind="Pawn", direction="Backward"))

        assert result.success
        new_state = result.state
        # The opponent stays alive and keeps its recorded position
        assert new_state.sides[Side.B].remaining_count == 2
        assert target in new_state.sides[Side.B].characters
        # The cell now shows the Pawn
        assert occupant_at(new_state.board, Position(x=2, y=2)).character_id == pawn.character_id
        assert not any(isinstance(e, CharacterCaptured) for e in result.events)
        assert not new_state.game_over

    def test_covered_character_leaving_clears_its_origin_cell(self):
        """The covered opponent still moves from its recorded cell and empties it,
        removing the landed Pawn from the board but not from its roster."""
        pawn = create_character(CharacterKind.PAWN, Side.A, 2, 1)
        target = create_character(CharacterKind.PAWN, Side.B, 2, 2)
        spare = create_character(CharacterKind.PAWN, Side.B, 4, 4)
        landed = process_action(
            build_state([pawn, target, spare]), MoveAction(kind="Pawn", direction="Backward")
        ).state

        result = process_action(landed, MoveAction(kind="Pawn", direction="Forward"))

        assert result.success
        state = result.state
        assert occupant_at(state.board, Position(x=2, y=1)).character_id == target.character_id
        assert occupant_at(state.board, Position(x=2, y=2)) is None
        a_roster = state.sides[Side.A]
        assert [c.character_id for c in a_roster.characters] == [pawn.character_id]
        assert a_roster.characters[0].position == Position(x=2, y=2)
        assert a_roster.remaining_count == 1
        assert not any(isinstance(e, CharacterCaptured) for e in result.events)

    def test_pawn_cannot_end_game_by_landing(self):
        pawn = create_character(CharacterKind.PAWN, Side.A, 0, 0)
        last = create_character(CharacterKind.PAWN, Side.B, 1, 0)
        state = build_state([pawn, last])

        result = process_action(state, MoveAction(kind="Pawn", direction="Right"))

        assert result.success
        assert result.state.sides[Side.B].remaining_count == 1
        assert not result.state.game_over
        assert result.state.winner is None
