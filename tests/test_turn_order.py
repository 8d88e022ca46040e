"""Tests for turn sequencing helpers."""

from woodland.rules import advance_turn, next_faction, next_phase
from woodland.state.schema import Faction, Phase


class TestNextPhase:
    """Test next_phase."""

    def test_cycle(self):
        assert next_phase(Phase.BIRDSONG) == Phase.DAYLIGHT
        assert next_phase(Phase.DAYLIGHT) == Phase.EVENING
        assert next_phase(Phase.EVENING) == Phase.BIRDSONG


class TestNextFaction:
    """Test next_faction."""

    def test_cycle(self):
        assert next_faction(Faction.MARQUISE) == Faction.EYRIE
        assert next_faction(Faction.EYRIE) == Faction.WOODLAND_ALLIANCE
        assert next_faction(Faction.WOODLAND_ALLIANCE) == Faction.MARQUISE


class TestAdvanceTurn:
    """Test advance_turn."""

    def test_within_turn(self, dominion_state):
        """Daylight moves to evening for the same faction."""
        state = advance_turn(dominion_state)

        assert state.turn.current_faction == Faction.EYRIE
        assert state.turn.phase == Phase.EVENING
        assert state.turn.round_number == 3
        assert dominion_state.turn.phase == Phase.DAYLIGHT

    def test_evening_passes_to_next_faction(self, dominion_state):
        """After evening the next faction starts at birdsong."""
        state = advance_turn(advance_turn(dominion_state))

        assert state.turn.current_faction == Faction.WOODLAND_ALLIANCE
        assert state.turn.phase == Phase.BIRDSONG
        assert state.turn.round_number == 3

    def test_round_increments_on_wrap(self, base_state):
        """Returning to the Marquise starts a new round."""
        base_state.turn.current_faction = Faction.WOODLAND_ALLIANCE
        base_state.turn.phase = Phase.EVENING

        state = advance_turn(base_state)

        assert state.turn.current_faction == Faction.MARQUISE
        assert state.turn.round_number == 2

    def test_clears_substep(self, base_state):
        """Any in-progress substep is dropped."""
        base_state.turn.action_substep = "recruit"

        state = advance_turn(base_state)

        assert state.turn.action_substep is None
