"""Tests for event generation and sequencing."""

from app.schemas.game_engine import MatchState, Side
from app.services.game.engine import (
    CharacterMoved,
    CharactersDeployed,
    DeployAction,
    MoveAction,
    PlayStarted,
    TurnChanged,
    process_action,
)

from .conftest import specs


class TestEventSequencing:
    """Test that events have proper sequence numbers."""

    def test_events_have_sequential_seq_numbers(self, new_match: MatchState):
        result = process_action(
            new_match, DeployAction(side=Side.A, characters=specs("Pawn", "Ghost"))
        )

        assert result.success
        for i, event in enumerate(result.events):
            assert event.seq == i
        assert result.state.event_seq == len(result.events)

    def test_seq_numbers_continue_across_actions(self, deployed_match: MatchState):
        start = deployed_match.event_seq

        result = process_action(deployed_match, MoveAction(kind="Pawn", direction="Forward"))

        assert result.events[0].seq == start
        assert result.state.event_seq == start + len(result.events)

    def test_noop_and_rejected_actions_do_not_advance_seq(self, deployed_match: MatchState):
        noop = process_action(deployed_match, DeployAction(side=Side.A, characters=specs("Pawn")))
        rejected = process_action(deployed_match, MoveAction(kind="Pawn", direction="Nowhere"))

        assert noop.state.event_seq == deployed_match.event_seq
        assert rejected.state is None


class TestEventOrdering:
    """Test the order of events within one action."""

    def test_second_deploy_event_order(self, new_match: MatchState):
        first = process_action(new_match, DeployAction(side=Side.A, characters=specs("Pawn")))
        second = process_action(first.state, DeployAction(side=Side.B, characters=specs("Pawn")))

        assert [type(e) for e in second.events] == [CharactersDeployed, PlayStarted, TurnChanged]

    def test_move_event_order(self, deployed_match: MatchState):
        result = process_action(deployed_match, MoveAction(kind="Pawn", direction="Forward"))

        assert [type(e) for e in result.events] == [CharacterMoved, TurnChanged]

    def test_events_serialize_with_discriminator(self, deployed_match: MatchState):
        result = process_action(deployed_match, MoveAction(kind="Pawn", direction="Forward"))

        dumped = [e.model_dump(mode="json") for e in result.events]
        assert dumped[0]["event_type"] == "character_moved"
        assert dumped[0]["to_position"] == {"x": 0, "y": 3}
        assert dumped[1]["event_type"] == "turn_changed"
